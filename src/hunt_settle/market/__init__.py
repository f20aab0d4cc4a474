"""Market Data Module - item identity, NPC prices and market depth."""

from .base import MarketDataSource, market_key
from .models import ItemMetadata, MarketOffer, MarketSnapshot, NpcBuyer, OrderLevel
from .price import PriceCheck, get_price_by_name
from .static_source import StaticMarketSource
from .tibia_client import TibiaMarketClient

__all__ = [
    "ItemMetadata",
    "MarketDataSource",
    "MarketOffer",
    "MarketSnapshot",
    "NpcBuyer",
    "OrderLevel",
    "PriceCheck",
    "StaticMarketSource",
    "TibiaMarketClient",
    "get_price_by_name",
    "market_key",
]
