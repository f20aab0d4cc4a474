"""Data models for market data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class NpcBuyer:
    """An NPC vendor that buys an item from players."""

    name: str
    price: int
    location: str = ""


@dataclass
class ItemMetadata:
    """Static item facts from the metadata endpoint."""

    item_id: int
    name: str  # lower-cased item name
    npc_buyers: list[NpcBuyer] = field(default_factory=list)


@dataclass
class OrderLevel:
    """One buy-side order-book entry."""

    price: int
    quantity: int
    timestamp: float = 0.0


@dataclass
class MarketOffer:
    """Top-of-book and monthly averages for one item on one world."""

    item_id: int
    buy_offer: int | None = None
    sell_offer: int | None = None
    month_average_buy: int | None = None
    month_average_sell: int | None = None
    time: float | None = None


@dataclass
class MarketSnapshot:
    """Point-in-time market values for a batch of items."""

    as_of: datetime
    offers: dict[int, MarketOffer] = field(default_factory=dict)

    def buy_offer(self, item_id: int) -> int | None:
        offer = self.offers.get(item_id)
        return offer.buy_offer if offer else None
