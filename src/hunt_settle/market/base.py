"""Base class for market data sources.

The settlement engine only talks to this interface. Concrete sources
(the live Tibia Market API client, a static snapshot) own their own
transport, caching and throttling.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

from .models import MarketSnapshot, NpcBuyer, OrderLevel


def market_key(name: str) -> str:
    """Lookup key for item names: lower-cased, whitespace collapsed."""
    return re.sub(r"\s+", " ", str(name or "")).strip().lower()


class MarketDataSource(ABC):
    """Abstract market data collaborator."""

    @abstractmethod
    def resolve_identity(self, name: str) -> int | None:
        """Return the item id for an item name, or None if unknown."""
        ...

    @abstractmethod
    def get_npc_buyers(self, item_id: int) -> list[NpcBuyer]:
        """NPCs that buy the item, best price first."""
        ...

    @abstractmethod
    def get_market_snapshot(self, item_ids: list[int]) -> MarketSnapshot:
        """Top-of-book offers for a batch of items in one call."""
        ...

    def get_npc_buy_price(self, item_id: int) -> int:
        """Best NPC buy-back price (0 if no NPC buys the item)."""
        return max((b.price for b in self.get_npc_buyers(item_id)), default=0)

    def get_top_of_book_buy_offer(self, item_id: int) -> int | None:
        return self.get_market_snapshot([item_id]).buy_offer(item_id)

    def get_order_book_depth(self, item_id: int) -> list[OrderLevel] | None:
        """Buy-side order book, or None when depth is not available."""
        return None

    def close(self) -> None:
        pass

    def __enter__(self) -> MarketDataSource:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
