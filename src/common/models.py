"""Shared Pydantic data models for the hunt settlement engine.

These models define the result contract handed from the settlement
engine to the presentation layer (chat bot, CLI, JSON export). Results
are frozen: once a run builds one it is never mutated.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


# === Enums ===

class Route(str, Enum):
    """How a looted item is valued and liquidated."""
    CURRENCY = "currency"
    MARKET = "market"
    NPC = "npc"
    UNMATCHED = "unmatched"


_FROZEN = {"frozen": True, "populate_by_name": True}


# === Split ===

class ParticipantSettlement(BaseModel):
    """One participant's position after the equal split."""
    name: str
    supplies_cost: int = Field(description="Supplies spent during the hunt (gp)")
    held_loot_value: int = Field(description="Value of loot this participant holds (gp)")
    fair_payout: int = Field(description="Supplies refund + equal share (gp)")
    delta: int = Field(description="held_loot_value - fair_payout; > 0 pays, < 0 receives")

    model_config = _FROZEN


class TransferRecord(BaseModel):
    """A directed payment clearing part of the outstanding deltas."""
    from_name: str = Field(alias="from")
    to_name: str = Field(alias="to")
    amount: int = Field(gt=0)

    model_config = _FROZEN


# === Liquidation plan ===

class ConsumedLevel(BaseModel):
    """Portion of one buy-side order-book level taken by an instant sale."""
    price: int
    quantity: int

    model_config = _FROZEN


class SellInstruction(BaseModel):
    """Where and for how much to sell one stack of loot."""
    name: str
    qty: int = Field(ge=1)
    item_id: int | None = None
    route: Route
    chosen_total: int
    market_total: int
    npc_unit_price: int
    npc_total: int
    buy_offer: int | None = None
    sell_offer: int | None = None
    month_average_buy: int | None = None
    month_average_sell: int | None = None
    best_npc: str = ""
    used_levels: list[ConsumedLevel] = []

    model_config = _FROZEN


class UnmatchedLoot(BaseModel):
    """Loot that could not be identified and must be priced by hand."""
    name: str
    qty: int = Field(ge=1)

    model_config = _FROZEN


class ParticipantSellPlan(BaseModel):
    """Sell-venue buckets for one participant."""
    market: list[SellInstruction] = []
    npc: list[SellInstruction] = []
    unmatched: list[UnmatchedLoot] = []

    model_config = _FROZEN


# === Settlement result ===

class SettlementResult(BaseModel):
    """Complete outcome of one settlement run."""
    as_of: datetime = Field(description="Timestamp of the market snapshot used")
    total_held_loot: int
    total_supplies: int
    corrected_net: int
    equal_share: int
    per_participant: list[ParticipantSettlement]
    transfers: list[TransferRecord] = []
    sell_instructions_by_participant: dict[str, ParticipantSellPlan] = {}
    unmatched_item_names: list[str] = []
    degraded_item_names: list[str] = []

    model_config = _FROZEN

    @property
    def participant_count(self) -> int:
        return len(self.per_participant)

    @property
    def undistributed_remainder(self) -> int:
        """Rounding loss left with the payers by the floored share."""
        return self.corrected_net - self.equal_share * self.participant_count

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
