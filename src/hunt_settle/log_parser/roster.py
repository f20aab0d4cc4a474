"""Party hunt analyzer parser.

Extracts the hunt roster (participant names with their supplies cost)
from the party analyzer paste. A typical paste looks like:

    Session data: From 2024-05-01, 20:01:12 to 2024-05-01, 21:31:40
    Session: 01:30h
    Loot Type: Market
    Loot: 1,734,216
    Supplies: 612,004
    Balance: 1,122,212
    Knight Name (Leader)
        Loot: 1,190,417
        Supplies: 245,812
        Balance: 944,605
        Damage: 4,120,337
        Healing: 1,002,311
    067 Druid Name
        Loot: 543,799
        Supplies: 366,192
        ...

Parsing is best-effort: headers without a Supplies line in their block
are dropped, and nothing here raises on malformed text.
"""

from __future__ import annotations

import logging
import re

from ...common.config import ParserSettings, settings
from .lines import Line, ItemLine, StatLine, TextLine, classify_lines
from .models import RosterEntry

logger = logging.getLogger(__name__)

_INDEX_TOKEN_RE = re.compile(r"^\s*\d+\s+")
_LEADER_RE = re.compile(r"\(leader\)", re.IGNORECASE)

# Bare stat words that can appear on their own line in collapsed pastes
_STAT_WORDS = {"loot", "supplies", "balance"}


def clean_participant_name(header: str) -> str:
    """Strip a leading numeric index token and the leader marker.

    "067 Parcel Macius" -> "Parcel Macius"
    "Knight Name (Leader)" -> "Knight Name"
    """
    name = _INDEX_TOKEN_RE.sub("", str(header or ""))
    name = _LEADER_RE.sub("", name)
    return re.sub(r"\s+", " ", name).strip()


def _find_supplies(lines: list[Line], start: int, lookahead: int) -> int | None:
    """Scan up to ``lookahead`` lines below a header for its Supplies value."""
    for j in range(start + 1, min(start + 1 + lookahead, len(lines))):
        line = lines[j]
        if isinstance(line, StatLine) and line.kind == "supplies":
            return line.value
        if isinstance(line, (TextLine, ItemLine)):
            # Next candidate header reached
            return None
    return None


def parse_party_analyzer(
    text: str | None,
    parser_settings: ParserSettings | None = None,
) -> list[RosterEntry]:
    """Parse a party analyzer paste into an ordered roster.

    Args:
        text: Raw party analyzer text.
        parser_settings: Parser settings (default: project settings).

    Returns:
        Roster entries in paste order, deduplicated by case-insensitive
        name (first occurrence wins).
    """
    parser_settings = parser_settings or settings.parser
    lines = classify_lines(text, parser_settings)

    roster: list[RosterEntry] = []
    seen: set[str] = set()

    for i, line in enumerate(lines):
        if not isinstance(line, TextLine):
            continue

        name = clean_participant_name(line.text)
        if not name or name.lower() in _STAT_WORDS:
            continue

        supplies = _find_supplies(lines, i, parser_settings.lookahead_lines)
        if supplies is None:
            logger.debug(
                "Dropping roster header %r: no Supplies within %d lines",
                name,
                parser_settings.lookahead_lines,
            )
            continue

        key = name.casefold()
        if key in seen:
            logger.debug("Ignoring duplicate roster entry %r", name)
            continue
        seen.add(key)
        roster.append(RosterEntry(name=name, supplies=supplies))

    logger.info("Parsed %d participants from party analyzer", len(roster))
    return roster
