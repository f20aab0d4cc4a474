"""End-to-end tests for the command-line entry points.

Runs the settlement and price-check CLIs against the fixture pastes and
the static market snapshot, so no network access is needed.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from src.hunt_settle.market import main as market_main
from src.hunt_settle.settlement import main as settlement_main


class TestSettlementCLI:
    def _argv(self, fixtures_dir, *extra):
        return [
            "settle",
            "--party", str(fixtures_dir / "party_analyzer.txt"),
            "--loot", f"Knight Name={fixtures_dir / 'looter_knight.txt'}",
            "--loot", f"Parcel Macius={fixtures_dir / 'looter_parcel.txt'}",
            "--snapshot", str(fixtures_dir / "market_snapshot.json"),
            *extra,
        ]

    def test_writes_json_result(self, fixtures_dir, tmp_path):
        output = tmp_path / "result.json"
        with patch("sys.argv", self._argv(fixtures_dir, "--output", str(output))):
            settlement_main.main()

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["total_held_loot"] == 5880
        assert data["transfers"] == [
            {"from": "Knight Name", "to": "Parcel Macius", "amount": 63130}
        ]
        assert data["unmatched_item_names"] == ["strange amulet"]
        assert [p["name"] for p in data["per_participant"]] == ["Knight Name", "Parcel Macius"]

    def test_missing_loot_exits_nonzero(self, fixtures_dir):
        argv = [
            "settle",
            "--party", str(fixtures_dir / "party_analyzer.txt"),
            "--loot", f"Knight Name={fixtures_dir / 'looter_knight.txt'}",
            "--snapshot", str(fixtures_dir / "market_snapshot.json"),
        ]
        with patch("sys.argv", argv), pytest.raises(SystemExit) as exc_info:
            settlement_main.main()
        assert exc_info.value.code == 1

    def test_parse_loot_arg(self):
        name, path = settlement_main.parse_loot_arg("Knight Name = knight.txt")
        assert name == "Knight Name"
        assert path.name == "knight.txt"


class TestPriceCLI:
    def test_json_output(self, fixtures_dir, capsys):
        argv = [
            "price",
            "small ruby",
            "--snapshot", str(fixtures_dir / "market_snapshot.json"),
            "--json",
        ]
        with patch("sys.argv", argv):
            market_main.main()

        out = capsys.readouterr().out
        data = json.loads(out[out.index("{"):])
        assert data["found"] is True
        assert data["buy"] == 200
        assert data["npc_buy"] == 250
