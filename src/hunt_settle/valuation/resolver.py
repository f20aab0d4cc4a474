"""Item valuation resolver.

Prices every distinct looted item under the dual-price policy:
an item is worth whichever is higher of

    NPC total     best NPC buy-back price x qty
    market total  proceeds of selling qty into the buy-side order book
                  (top-of-book buy offer x qty when depth is unavailable)

with ties going to the NPC. Currency items have fixed values and are
never looked up.

Lookups happen once per distinct item name, serially, and all of them
finish before any valuation is handed out, so the settlement math never
sees a partially filled quote map.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from ...common.config import ValuationSettings, settings
from ...common.models import Route
from ..errors import MarketDataUnavailableError
from ..market.base import MarketDataSource
from ..market.models import MarketSnapshot
from .depth import instant_sell_value
from .models import ItemQuote, ItemValuation, QuoteStatus, ResolvedQuotes
from .names import candidate_names, currency_value

logger = logging.getLogger(__name__)


class ValuationResolver:
    """Resolve item names to quotes and value loot stacks.

    Usage:
        resolver = ValuationResolver(StaticMarketSource.from_json("snap.json"))
        resolved = resolver.resolve(["dragon shield", "gold coins"])
        valuation = resolver.value_line(resolved.quotes["dragon shield"], 3)
    """

    def __init__(
        self,
        source: MarketDataSource,
        valuation_settings: ValuationSettings | None = None,
    ) -> None:
        self.source = source
        self.settings = valuation_settings or settings.valuation

    def resolve_item_id(self, name: str) -> int | None:
        """First item id matching the name or one of its variants."""
        for candidate in candidate_names(name):
            item_id = self.source.resolve_identity(candidate)
            if item_id is not None:
                return item_id
        return None

    def resolve(self, names: Iterable[str]) -> ResolvedQuotes:
        """Build a quote for every distinct name.

        Raises:
            MarketDataUnavailableError: If item identities cannot be
                looked up at all.
        """
        quotes: dict[str, ItemQuote] = {}

        for name in dict.fromkeys(names):
            fixed = currency_value(name, self.settings.currency)
            if fixed is not None:
                quotes[name] = ItemQuote(name=name, status=QuoteStatus.CURRENCY, currency_value=fixed)
                continue

            item_id = self.resolve_item_id(name)
            if item_id is None:
                logger.warning("Unmatched item name: %r", name)
                quotes[name] = ItemQuote(name=name, status=QuoteStatus.UNMATCHED)
                continue

            quotes[name] = self._npc_quote(name, item_id)

        resolved = [q for q in quotes.values() if q.status == QuoteStatus.RESOLVED]
        snapshot = self._fetch_snapshot([q.item_id for q in resolved])

        for quote in resolved:
            self._apply_market(quote, snapshot)

        as_of = snapshot.as_of if snapshot else datetime.now(timezone.utc)
        result = ResolvedQuotes(as_of=as_of, quotes=quotes)
        logger.info(
            "Resolved %d items (%d unmatched, %d degraded)",
            len(quotes),
            len(result.unmatched_names),
            len(result.degraded_names),
        )
        return result

    def _npc_quote(self, name: str, item_id: int) -> ItemQuote:
        quote = ItemQuote(name=name, status=QuoteStatus.RESOLVED, item_id=item_id)
        try:
            buyers = self.source.get_npc_buyers(item_id)
        except MarketDataUnavailableError as exc:
            logger.warning("NPC prices unavailable for %r: %s", name, exc)
            quote.degraded.append("npc")
            return quote

        if buyers:
            best = max(buyers, key=lambda b: b.price)
            quote.npc_unit_price = best.price
            quote.best_npc = f"{best.name} ({best.price})" if best.name else ""
        return quote

    def _fetch_snapshot(self, item_ids: list[int]) -> MarketSnapshot | None:
        try:
            return self.source.get_market_snapshot(item_ids)
        except MarketDataUnavailableError as exc:
            logger.warning("Market snapshot unavailable, valuing at NPC prices only: %s", exc)
            return None

    def _apply_market(self, quote: ItemQuote, snapshot: MarketSnapshot | None) -> None:
        if snapshot is not None:
            offer = snapshot.offers.get(quote.item_id)
            if offer is not None:
                quote.buy_offer = offer.buy_offer
                quote.sell_offer = offer.sell_offer
                quote.month_average_buy = offer.month_average_buy
                quote.month_average_sell = offer.month_average_sell

        if self.settings.use_depth:
            try:
                quote.depth = self.source.get_order_book_depth(quote.item_id)
            except MarketDataUnavailableError as exc:
                logger.warning("Order book unavailable for %r, using top of book: %s", quote.name, exc)
                quote.degraded.append("depth")

        if snapshot is None and quote.depth is None:
            quote.degraded.append("market")

    def value_line(self, quote: ItemQuote, qty: int) -> ItemValuation:
        """Value ``qty`` units of a quoted item and pick the sell route."""
        if quote.status == QuoteStatus.CURRENCY:
            total = quote.currency_value * qty
            return ItemValuation(
                name=quote.name, qty=qty, route=Route.CURRENCY, chosen_total=total, quote=quote,
            )

        if quote.status == QuoteStatus.UNMATCHED:
            return ItemValuation(
                name=quote.name, qty=qty, route=Route.UNMATCHED, chosen_total=0, quote=quote,
            )

        npc_total = quote.npc_unit_price * qty
        used_levels = []
        if quote.depth is not None:
            market_total, used_levels = instant_sell_value(quote.depth, qty)
        elif quote.buy_offer is not None:
            market_total = max(0, quote.buy_offer) * qty
        else:
            market_total = 0

        route = Route.MARKET if market_total > npc_total else Route.NPC
        return ItemValuation(
            name=quote.name,
            qty=qty,
            route=route,
            chosen_total=max(market_total, npc_total),
            npc_unit_price=quote.npc_unit_price,
            npc_total=npc_total,
            market_total=market_total,
            used_levels=used_levels,
            quote=quote,
        )

    def value_loot(
        self,
        resolved: ResolvedQuotes,
        qty_by_name: dict[str, int],
    ) -> list[ItemValuation]:
        """Value one participant's aggregated loot."""
        return [
            self.value_line(resolved.quotes[name], qty)
            for name, qty in qty_by_name.items()
        ]
