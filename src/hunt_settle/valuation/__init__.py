"""Item Valuation Module - NPC buy-back vs. market liquidation."""

from .depth import instant_sell_value
from .models import FilledLevel, ItemQuote, ItemValuation, QuoteStatus, ResolvedQuotes
from .names import candidate_names, currency_value
from .resolver import ValuationResolver

__all__ = [
    "FilledLevel",
    "ItemQuote",
    "ItemValuation",
    "QuoteStatus",
    "ResolvedQuotes",
    "ValuationResolver",
    "candidate_names",
    "currency_value",
    "instant_sell_value",
]
