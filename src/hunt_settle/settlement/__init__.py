"""Settlement Module - equal profit split and debt-clearing transfers."""

from .calculator import compute_split, settle_transfers
from .models import Position, SplitEntry, SplitOutcome, Transfer
from .service import SettlementService

__all__ = [
    "Position",
    "SettlementService",
    "SplitEntry",
    "SplitOutcome",
    "Transfer",
    "compute_split",
    "settle_transfers",
]
