"""Data models for item valuation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ...common.models import Route
from ..market.models import OrderLevel


class QuoteStatus(str, Enum):
    CURRENCY = "currency"
    RESOLVED = "resolved"
    UNMATCHED = "unmatched"


@dataclass
class ItemQuote:
    """Everything the market told us about one distinct item name."""

    name: str
    status: QuoteStatus
    item_id: int | None = None
    currency_value: int = 0
    npc_unit_price: int = 0
    best_npc: str = ""
    depth: list[OrderLevel] | None = None
    buy_offer: int | None = None
    sell_offer: int | None = None
    month_average_buy: int | None = None
    month_average_sell: int | None = None
    degraded: list[str] = field(default_factory=list)  # "npc", "depth", "market"


@dataclass
class FilledLevel:
    """Part of an order-book level consumed by an instant sale."""

    price: int
    quantity: int


@dataclass
class ItemValuation:
    """Valuation of one participant's stack of one item."""

    name: str
    qty: int
    route: Route
    chosen_total: int
    npc_unit_price: int = 0
    npc_total: int = 0
    market_total: int = 0
    used_levels: list[FilledLevel] = field(default_factory=list)
    quote: ItemQuote | None = None

    @property
    def chosen_unit_value(self) -> float:
        return self.chosen_total / self.qty if self.qty else 0.0


@dataclass
class ResolvedQuotes:
    """All quotes for one run, fully resolved before any settlement math."""

    as_of: datetime
    quotes: dict[str, ItemQuote] = field(default_factory=dict)

    @property
    def unmatched_names(self) -> list[str]:
        return [q.name for q in self.quotes.values() if q.status == QuoteStatus.UNMATCHED]

    @property
    def degraded_names(self) -> list[str]:
        return [q.name for q in self.quotes.values() if q.degraded]
