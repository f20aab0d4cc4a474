"""CLI entry point for market price checks.

Usage:
    python -m src.hunt_settle.market.main "dragon shield"
    python -m src.hunt_settle.market.main "dragon shield" --world Antica
    python -m src.hunt_settle.market.main "dragon shield" --snapshot snapshot.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from ...common.logging import setup_logging
from ..common.config import Config
from ..common.gold import format_gold
from ..errors import MarketDataUnavailableError
from .base import MarketDataSource
from .price import get_price_by_name
from .static_source import StaticMarketSource
from .tibia_client import TibiaMarketClient

logger = logging.getLogger(__name__)


def build_source(world: str | None, snapshot: str | None) -> MarketDataSource:
    """Static snapshot if given, otherwise the live API."""
    if snapshot:
        return StaticMarketSource.from_json(snapshot)
    config = Config()
    if world:
        config.world = world
    return TibiaMarketClient(config)


def main() -> None:
    parser = argparse.ArgumentParser(description="Tibia Market Price Check")
    parser.add_argument("item", type=str, help="Item name (e.g., 'dragon shield')")
    parser.add_argument("--world", type=str, help="Game world (default: MARKET_WORLD or Secura)")
    parser.add_argument("--snapshot", type=str, help="Use a static market snapshot JSON")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    args = parser.parse_args()
    setup_logging(level=logging.INFO)

    try:
        with build_source(args.world, args.snapshot) as source:
            check = get_price_by_name(source, args.item)
    except MarketDataUnavailableError as exc:
        logger.error("Price check failed: %s", exc)
        sys.exit(1)

    if args.json:
        print(json.dumps(check.to_dict(), ensure_ascii=False, indent=2))
        return

    if not check.found:
        logger.info("No data for %s (%s)", args.item, check.reason)
        return

    logger.info("%s (id %s)", args.item, check.item_id)
    logger.info("  BUY offer:  %s gp", format_gold(check.buy))
    logger.info("  SELL offer: %s gp", format_gold(check.sell))
    logger.info("  NPC buys:   %s gp", format_gold(check.npc_buy))
    logger.info("  Updated:    %s", check.as_of.isoformat() if check.as_of else "n/a")


if __name__ == "__main__":
    main()
