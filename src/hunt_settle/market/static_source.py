"""Static market snapshot source.

Serves a fixed, previously captured market snapshot. Used for offline
runs, replaying a past settlement, and tests. Snapshot JSON layout:

    {
      "as_of": "2026-10-19T12:00:00+00:00",
      "items": [
        {
          "id": 3079,
          "name": "boots of haste",
          "npc_buyers": [{"name": "Rashid", "price": 30000}],
          "buy_offer": 31000,
          "sell_offer": 35000,
          "depth": [{"price": 31000, "quantity": 1, "timestamp": 1760870000}]
        }
      ]
    }

An item without a "depth" key has no order-book data, so valuation
falls back to its top-of-book buy offer.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from .base import MarketDataSource, market_key
from .models import MarketOffer, MarketSnapshot, NpcBuyer, OrderLevel


class StaticMarketSource(MarketDataSource):
    """In-memory market data source built from a snapshot dict."""

    def __init__(self, data: dict) -> None:
        as_of = data.get("as_of")
        if isinstance(as_of, datetime):
            self.as_of = as_of
        elif as_of:
            self.as_of = datetime.fromisoformat(str(as_of).replace("Z", "+00:00"))
        else:
            self.as_of = datetime.now(timezone.utc)

        self._name_to_id: dict[str, int] = {}
        self._buyers: dict[int, list[NpcBuyer]] = {}
        self._offers: dict[int, MarketOffer] = {}
        self._depth: dict[int, list[OrderLevel]] = {}

        for item in data.get("items", []):
            item_id = int(item["id"])
            self._name_to_id.setdefault(market_key(item["name"]), item_id)
            self._buyers[item_id] = sorted(
                (
                    NpcBuyer(name=b.get("name", ""), price=int(b["price"]), location=b.get("location", ""))
                    for b in item.get("npc_buyers", [])
                ),
                key=lambda b: b.price,
                reverse=True,
            )
            self._offers[item_id] = MarketOffer(
                item_id=item_id,
                buy_offer=item.get("buy_offer"),
                sell_offer=item.get("sell_offer"),
                month_average_buy=item.get("month_average_buy"),
                month_average_sell=item.get("month_average_sell"),
            )
            if "depth" in item:
                self._depth[item_id] = [
                    OrderLevel(
                        price=int(level["price"]),
                        quantity=int(level["quantity"]),
                        timestamp=float(level.get("timestamp", 0)),
                    )
                    for level in item["depth"]
                ]

    @classmethod
    def from_json(cls, path: str | Path) -> StaticMarketSource:
        with open(path, "r", encoding="utf-8") as f:
            return cls(json.load(f))

    def resolve_identity(self, name: str) -> int | None:
        return self._name_to_id.get(market_key(name))

    def get_npc_buyers(self, item_id: int) -> list[NpcBuyer]:
        return list(self._buyers.get(item_id, []))

    def get_market_snapshot(self, item_ids: list[int]) -> MarketSnapshot:
        offers = {i: self._offers[i] for i in item_ids if i in self._offers}
        return MarketSnapshot(as_of=self.as_of, offers=offers)

    def get_order_book_depth(self, item_id: int) -> list[OrderLevel] | None:
        levels = self._depth.get(item_id)
        return list(levels) if levels is not None else None
