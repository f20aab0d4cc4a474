"""Data models for parsed analyzer text."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RosterEntry:
    """A hunt participant parsed from the party hunt analyzer."""

    name: str
    supplies: int  # gp spent on consumables

    def to_dict(self) -> dict:
        return {"name": self.name, "supplies": self.supplies}


@dataclass
class LootLine:
    """One `<qty> x <item>` entry from a participant's hunt analyzer."""

    name: str  # normalized item name
    qty: int

    def to_dict(self) -> dict:
        return {"name": self.name, "qty": self.qty}
