"""CLI entry point for hunt settlement.

Usage:
    python -m src.hunt_settle.settlement.main --party party.txt \\
        --loot "Knight Name=knight.txt" --loot "Druid Name=druid.txt"
    python -m src.hunt_settle.settlement.main --party party.txt \\
        --loot "Knight Name=knight.txt" --snapshot snapshot.json --output result.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ...common.config import Settings
from ...common.logging import setup_logging
from ..common.gold import format_gold, format_int
from ..errors import MarketDataUnavailableError, SettlementError
from ..market.main import build_source
from .service import SettlementService

logger = logging.getLogger(__name__)


def parse_loot_arg(value: str) -> tuple[str, Path]:
    """Split a ``NAME=path`` argument."""
    name, sep, path = value.partition("=")
    if not sep or not name.strip() or not path.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=path, got {value!r}")
    return name.strip(), Path(path.strip())


def main() -> None:
    parser = argparse.ArgumentParser(description="Hunt Profit Settlement")
    parser.add_argument(
        "--party",
        type=Path,
        required=True,
        help="Party hunt analyzer paste (text file)",
    )
    parser.add_argument(
        "--loot",
        type=parse_loot_arg,
        action="append",
        default=[],
        metavar="NAME=PATH",
        help="Hunt analyzer paste for one participant (repeatable)",
    )
    parser.add_argument("--world", type=str, help="Game world (default: MARKET_WORLD or Secura)")
    parser.add_argument("--snapshot", type=str, help="Use a static market snapshot JSON")
    parser.add_argument("--settings", type=str, help="Path to settings YAML")
    parser.add_argument("--output", type=str, help="Output JSON file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args()
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    settings = Settings.load(args.settings) if args.settings else None
    party_text = args.party.read_text(encoding="utf-8")
    loot_texts = {name: path.read_text(encoding="utf-8") for name, path in args.loot}

    try:
        with build_source(args.world, args.snapshot) as source:
            result = SettlementService(source, settings).settle_from_text(party_text, loot_texts)
    except (SettlementError, MarketDataUnavailableError) as exc:
        logger.error("Settlement failed: %s", exc)
        sys.exit(1)

    logger.info("Market data as of %s", result.as_of.isoformat())
    logger.info(
        "Loot %s gp | Supplies %s gp | Net %s gp | Share each (%d) %s gp",
        format_int(result.total_held_loot),
        format_int(result.total_supplies),
        format_int(result.corrected_net),
        result.participant_count,
        format_int(result.equal_share),
    )

    if result.transfers:
        for t in result.transfers:
            logger.info("  %s -> %s: %s gp", t.from_name, t.to_name, format_int(t.amount))
    else:
        logger.info("  No transfers needed.")

    for name, plan in result.sell_instructions_by_participant.items():
        for s in plan.market:
            logger.info("  [%s] MARKET %dx %s = %s", name, s.qty, s.name, format_gold(s.chosen_total))
        for s in plan.npc:
            logger.info("  [%s] NPC    %dx %s = %s", name, s.qty, s.name, format_gold(s.chosen_total))
        for u in plan.unmatched:
            logger.warning("  [%s] UNMATCHED %dx %s (price manually)", name, u.qty, u.name)

    if result.degraded_item_names:
        logger.warning("Degraded market data for: %s", ", ".join(result.degraded_item_names))

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info("Output written to %s", args.output)


if __name__ == "__main__":
    main()
