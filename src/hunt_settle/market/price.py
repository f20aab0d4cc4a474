"""Single-item price check."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .base import MarketDataSource


@dataclass
class PriceCheck:
    """Current buy/sell offers for one item."""

    name: str
    found: bool
    item_id: int | None = None
    buy: int | None = None
    sell: int | None = None
    npc_buy: int = 0
    as_of: datetime | None = None
    reason: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "found": self.found,
            "item_id": self.item_id,
            "buy": self.buy,
            "sell": self.sell,
            "npc_buy": self.npc_buy,
            "as_of": self.as_of.isoformat() if self.as_of else None,
            "reason": self.reason,
        }


def get_price_by_name(source: MarketDataSource, name: str) -> PriceCheck:
    """Look up the current market offers for an item by name."""
    item_id = source.resolve_identity(name)
    if item_id is None:
        return PriceCheck(name=name, found=False, reason="unknown item name")

    snapshot = source.get_market_snapshot([item_id])
    offer = snapshot.offers.get(item_id)
    if offer is None:
        return PriceCheck(
            name=name,
            found=False,
            item_id=item_id,
            as_of=snapshot.as_of,
            reason="no market data for item",
        )

    return PriceCheck(
        name=name,
        found=True,
        item_id=item_id,
        buy=offer.buy_offer,
        sell=offer.sell_offer,
        npc_buy=source.get_npc_buy_price(item_id),
        as_of=snapshot.as_of,
    )
