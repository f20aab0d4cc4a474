"""
Hunt Settlement Engine

Modules:
- log_parser: Parse party roster and per-player looter analyzer pastes
- market: Item identity, NPC prices and order-book depth (Tibia Market API)
- valuation: Value loot at the better of NPC buy-back and market liquidation
- settlement: Equal profit split with supplies refund and transfers
- liquidation: Per-player sell lists (market / NPC / unmatched)
- common: Shared utilities
"""

__version__ = "0.1.0"
