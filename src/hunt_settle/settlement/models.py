"""Data models for the profit split."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SplitEntry:
    """Calculator input: one participant in roster order."""

    name: str
    supplies: int
    held_loot_value: int


@dataclass
class Position:
    """One participant's position after the equal split."""

    name: str
    supplies: int
    held_loot_value: int
    fair_payout: int
    delta: int  # > 0 pays, < 0 receives

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "supplies": self.supplies,
            "held_loot_value": self.held_loot_value,
            "fair_payout": self.fair_payout,
            "delta": self.delta,
        }


@dataclass
class Transfer:
    """A payment from a participant holding too much loot value."""

    from_name: str
    to_name: str
    amount: int

    def to_dict(self) -> dict:
        return {"from": self.from_name, "to": self.to_name, "amount": self.amount}


@dataclass
class SplitOutcome:
    """Totals, positions and transfers for one hunt."""

    total_held_loot: int
    total_supplies: int
    corrected_net: int
    equal_share: int
    positions: list[Position] = field(default_factory=list)
    transfers: list[Transfer] = field(default_factory=list)

    @property
    def remainder(self) -> int:
        """Undistributed rounding loss, in [0, n)."""
        return self.corrected_net - self.equal_share * len(self.positions)
