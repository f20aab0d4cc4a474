"""Log Parser Module - party roster and looter analyzer text."""

from .lines import classify_line, normalize_item_name
from .loot import aggregate_loot, parse_hunt_analyzer
from .models import LootLine, RosterEntry
from .roster import clean_participant_name, parse_party_analyzer

__all__ = [
    "LootLine",
    "RosterEntry",
    "aggregate_loot",
    "classify_line",
    "clean_participant_name",
    "normalize_item_name",
    "parse_hunt_analyzer",
    "parse_party_analyzer",
]
