"""Tests for the equal-split calculator and the settlement service."""

from __future__ import annotations

import random

import pytest
from pydantic import ValidationError

from src.common.config import Settings
from src.hunt_settle.errors import EmptyRosterError, MissingLootSubmissionError
from src.hunt_settle.log_parser.models import LootLine, RosterEntry
from src.hunt_settle.market.static_source import StaticMarketSource
from src.hunt_settle.settlement.calculator import compute_split, settle_transfers
from src.hunt_settle.settlement.models import Position, SplitEntry
from src.hunt_settle.settlement.service import SettlementService


def _apply_transfers(outcome) -> dict[str, int]:
    remaining = {p.name: p.delta for p in outcome.positions}
    for t in outcome.transfers:
        remaining[t.from_name] -= t.amount
        remaining[t.to_name] += t.amount
    return remaining


def _random_entries(rng: random.Random, n: int) -> list[SplitEntry]:
    return [
        SplitEntry(
            name=f"P{i}",
            supplies=rng.randint(0, 500_000),
            held_loot_value=rng.choice([0, rng.randint(0, 2_000_000)]),
        )
        for i in range(n)
    ]


class TestComputeSplit:
    """Test the split math and transfer matching."""

    def test_supplies_heavy_hunt(self):
        """A holds 10 gp of coins, B holds nothing; B owes A."""
        outcome = compute_split([
            SplitEntry("A", supplies=1000, held_loot_value=10),
            SplitEntry("B", supplies=500, held_loot_value=0),
        ])

        assert outcome.total_held_loot == 10
        assert outcome.total_supplies == 1500
        assert outcome.corrected_net == -1490
        assert outcome.equal_share == -745
        a, b = outcome.positions
        assert (a.fair_payout, a.delta) == (255, -245)
        assert (b.fair_payout, b.delta) == (-245, 245)
        assert [t.to_dict() for t in outcome.transfers] == [
            {"from": "B", "to": "A", "amount": 245}
        ]
        assert b.to_dict() == {
            "name": "B",
            "supplies": 500,
            "held_loot_value": 0,
            "fair_payout": -245,
            "delta": 245,
        }

    def test_empty_roster(self):
        with pytest.raises(EmptyRosterError):
            compute_split([])

    def test_single_participant(self):
        outcome = compute_split([SplitEntry("Solo", supplies=100, held_loot_value=1000)])
        assert outcome.equal_share == 900
        assert outcome.positions[0].delta == 0
        assert outcome.transfers == []

    def test_floor_remainder_stays_with_payer(self):
        outcome = compute_split([
            SplitEntry("A", 0, 10),
            SplitEntry("B", 0, 0),
            SplitEntry("C", 0, 0),
        ])
        assert outcome.equal_share == 3
        assert outcome.remainder == 1
        assert [t.to_dict() for t in outcome.transfers] == [
            {"from": "A", "to": "B", "amount": 3},
            {"from": "A", "to": "C", "amount": 3},
        ]
        assert _apply_transfers(outcome) == {"A": 1, "B": 0, "C": 0}

    def test_zero_loot_zero_supplies_receives_share(self):
        outcome = compute_split([
            SplitEntry("Rich", 0, 900),
            SplitEntry("Idle", 0, 0),
        ])
        idle = outcome.positions[1]
        assert idle.delta == -outcome.equal_share == -450

    def test_transfers_follow_roster_order(self):
        positions = [
            Position("R1", 0, 0, 0, -30),
            Position("P1", 0, 0, 0, 50),
            Position("R2", 0, 0, 0, -40),
            Position("P2", 0, 0, 0, 20),
        ]
        transfers = settle_transfers(positions)
        assert [(t.from_name, t.to_name, t.amount) for t in transfers] == [
            ("P1", "R1", 30),
            ("P1", "R2", 20),
            ("P2", "R2", 20),
        ]

    @pytest.mark.parametrize("seed", range(25))
    def test_properties_hold_for_random_rosters(self, seed):
        rng = random.Random(seed)
        n = rng.randint(1, 8)
        outcome = compute_split(_random_entries(rng, n))

        total_delta = sum(p.delta for p in outcome.positions)
        assert total_delta == outcome.corrected_net - outcome.equal_share * n
        assert 0 <= total_delta < n

        payers = sum(1 for p in outcome.positions if p.delta > 0)
        receivers = sum(1 for p in outcome.positions if p.delta < 0)
        assert len(outcome.transfers) <= max(payers + receivers - 1, 0)
        assert all(t.amount > 0 for t in outcome.transfers)

        remaining = _apply_transfers(outcome)
        assert all(v >= 0 for v in remaining.values())
        assert sum(remaining.values()) == total_delta

    def test_deterministic(self):
        entries = _random_entries(random.Random(7), 6)
        first = compute_split(entries)
        second = compute_split(list(entries))
        assert first == second


class TestSettlementService:
    """End-to-end runs against the fixture snapshot."""

    @pytest.fixture
    def service(self, static_market, default_settings) -> SettlementService:
        return SettlementService(static_market, default_settings)

    def test_fixture_hunt(self, service, party_text, loot_texts):
        result = service.settle_from_text(party_text, loot_texts)

        # 120 coins + 60 (hams, top of book) + 5200 (shield, depth) + 500 (rubies, NPC)
        assert result.total_held_loot == 5880
        assert result.total_supplies == 612_004
        assert result.corrected_net == 5880 - 612_004
        assert result.equal_share == -303_062
        assert result.undistributed_remainder == 0

        knight, parcel = result.per_participant
        assert knight.name == "Knight Name"
        assert knight.held_loot_value == 5880
        assert knight.delta == 63_130
        assert parcel.delta == -63_130

        assert [(t.from_name, t.to_name, t.amount) for t in result.transfers] == [
            ("Knight Name", "Parcel Macius", 63_130)
        ]
        assert result.unmatched_item_names == ["strange amulet"]
        assert result.degraded_item_names == []
        assert result.as_of.isoformat() == "2026-10-18T21:35:00+00:00"

    def test_sell_plan(self, service, party_text, loot_texts):
        result = service.settle_from_text(party_text, loot_texts)
        plan = result.sell_instructions_by_participant["Knight Name"]

        assert [(s.name, s.chosen_total) for s in plan.market] == [
            ("dragon shield", 5200),
            ("dragon hams", 60),
        ]
        assert [(s.name, s.chosen_total) for s in plan.npc] == [("small rubies", 500)]
        assert [(u.name, u.qty) for u in plan.unmatched] == [("strange amulet", 1)]
        assert plan.market[0].used_levels[0].price == 5200

        empty = result.sell_instructions_by_participant["Parcel Macius"]
        assert empty.market == [] and empty.npc == [] and empty.unmatched == []

    def test_missing_submission(self, service, party_text, loot_texts):
        del loot_texts["Parcel Macius"]
        with pytest.raises(MissingLootSubmissionError) as exc_info:
            service.settle_from_text(party_text, loot_texts)
        assert exc_info.value.missing == ["Parcel Macius"]
        assert "Parcel Macius" in str(exc_info.value)

    def test_submission_names_case_insensitive(self, service):
        roster = [RosterEntry("Knight Name", 0)]
        result = service.settle(roster, {"knight name": [LootLine("gold coin", 5)]})
        assert result.total_held_loot == 5

    def test_empty_roster(self, service):
        with pytest.raises(EmptyRosterError):
            service.settle_from_text("Session data: nothing here", {})

    def test_duplicate_loot_lines_summed(self, service):
        roster = [RosterEntry("A", 0), RosterEntry("B", 0)]
        loot = {
            "A": [LootLine("dragon shield", 1), LootLine("dragon shield", 2)],
            "B": [],
        }
        result = service.settle(roster, loot)
        plan = result.sell_instructions_by_participant["A"]
        # 3 units into depth: 1@5200 + 2@5000
        assert plan.market[0].qty == 3
        assert plan.market[0].market_total == 15_200

    def test_currency_only_scenario(self, default_settings):
        source = StaticMarketSource({"as_of": "2026-10-19T00:00:00+00:00", "items": []})
        service = SettlementService(source, default_settings)
        result = service.settle(
            [RosterEntry("A", 1000), RosterEntry("B", 500)],
            {"A": [LootLine("gold coin", 10)], "B": []},
        )
        assert result.equal_share == -745
        assert [(t.from_name, t.to_name, t.amount) for t in result.transfers] == [("B", "A", 245)]
        assert result.sell_instructions_by_participant["A"].market == []

    def test_repeated_runs_identical(self, service, party_text, loot_texts):
        first = service.settle_from_text(party_text, loot_texts)
        second = service.settle_from_text(party_text, loot_texts)
        assert first.to_dict() == second.to_dict()

    def test_result_is_frozen(self, service, party_text, loot_texts):
        result = service.settle_from_text(party_text, loot_texts)
        with pytest.raises(ValidationError):
            result.equal_share = 0

    def test_settings_yaml_currency(self, tmp_path, static_market):
        path = tmp_path / "settings.yaml"
        path.write_text("valuation:\n  currency:\n    gold coin: 2\n", encoding="utf-8")
        service = SettlementService(static_market, Settings.load(path))
        result = service.settle([RosterEntry("A", 0)], {"A": [LootLine("gold coins", 10)]})
        assert result.total_held_loot == 20
