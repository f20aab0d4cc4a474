"""Hunt analyzer (looter) parser.

Extracts the `Looted Items:` section of one participant's hunt analyzer
paste. Accepts the normal multi-line paste and single-line pastes where
chat clients collapsed the newlines ("Looted Items: 9x a gold coin 2x
a sword").
"""

from __future__ import annotations

import logging
import re

from ...common.config import ParserSettings, settings
from .lines import Blank, Heading, ItemLine, classify_line, normalize_item_name, split_lines
from .models import LootLine

logger = logging.getLogger(__name__)

_MARKER_RE = re.compile(r"^looted items:", re.IGNORECASE)
_NONE_RE = re.compile(r"^none\b", re.IGNORECASE)
_ITEM_TOKEN_RE = re.compile(
    r"(\d+)\s*x\s+([^:]+?)(?=\s+\d+\s*x\s+|$)",
    re.IGNORECASE | re.DOTALL,
)
_FIRST_TOKEN_RE = re.compile(r"\d+\s*x\s+", re.IGNORECASE)
# Title-case words ending in a colon, e.g. "Killed Monsters:"
_INLINE_HEADING_RE = re.compile(r"(?:^|\s)((?:[A-Z][\w'-]*\s+)*[A-Z][\w'-]*)\s*:")


def _cut_at_heading(text: str, parser_settings: ParserSettings) -> str:
    """Drop everything from the first section heading after the first item."""
    first = _FIRST_TOKEN_RE.search(text)
    if not first:
        return text
    start = first.end()
    tail = text[start:]

    cuts = []
    for keyword in parser_settings.heading_keywords:
        m = re.search(rf"\b{re.escape(keyword)}\s*:", tail, re.IGNORECASE)
        if m:
            cuts.append(m.start())
    if not cuts:
        m = _INLINE_HEADING_RE.search(tail)
        if m:
            cuts.append(m.start(1))
    return text[:start + min(cuts)] if cuts else text


def extract_item_tokens(
    text: str,
    parser_settings: ParserSettings | None = None,
) -> list[LootLine]:
    """Pull every `<int> x <words>` token out of a collapsed string.

    Stops at the next section heading, so "2x a sword Killed Monsters: 3x
    dragon" yields only the sword.
    """
    parser_settings = parser_settings or settings.parser
    section = _cut_at_heading(text.strip(), parser_settings)
    items: list[LootLine] = []
    for m in _ITEM_TOKEN_RE.finditer(section.strip()):
        qty = int(m.group(1))
        name = normalize_item_name(m.group(2))
        if qty <= 0 or not name:
            continue
        items.append(LootLine(name=name, qty=qty))
    return items


def _parse_collapsed(text: str, parser_settings: ParserSettings) -> list[LootLine]:
    m = re.search(r"looted items:", text, re.IGNORECASE)
    section = text[m.end():] if m else text
    if _NONE_RE.match(section.strip()):
        return []
    return extract_item_tokens(section, parser_settings)


def parse_hunt_analyzer(
    text: str | None,
    parser_settings: ParserSettings | None = None,
) -> list[LootLine]:
    """Parse one participant's hunt analyzer paste into loot lines.

    "Looted Items: None" yields an empty list. Duplicate item lines are
    kept as separate entries; use aggregate_loot() to sum them.

    Args:
        text: Raw hunt analyzer text.
        parser_settings: Parser settings (default: project settings).

    Returns:
        Loot lines in order of appearance.
    """
    parser_settings = parser_settings or settings.parser
    lines = split_lines(text)
    marker = next(
        (i for i, line in enumerate(lines) if _MARKER_RE.match(line.strip())),
        None,
    )

    if marker is None:
        items = _parse_collapsed(str(text or ""), parser_settings)
        logger.debug("No 'Looted Items:' line, collapsed parse found %d items", len(items))
        return items

    items: list[LootLine] = []

    inline = lines[marker].strip()[len("looted items:"):].strip()
    if inline and not _NONE_RE.match(inline):
        items.extend(extract_item_tokens(inline, parser_settings))
        if _cut_at_heading(inline, parser_settings) != inline:
            # Next section started on the marker line
            return items

    for raw in lines[marker + 1:]:
        line = classify_line(raw, parser_settings)
        if isinstance(line, Blank):
            continue
        if isinstance(line, ItemLine):
            if line.qty > 0 and line.name:
                items.append(LootLine(name=line.name, qty=line.qty))
            continue
        if isinstance(line, Heading):
            # Next section (e.g. "Killed Monsters:")
            break
        if not _NONE_RE.match(raw.strip()):
            logger.debug("Skipping unrecognized loot line %r", raw.strip())

    return items


def aggregate_loot(lines: list[LootLine]) -> dict[str, int]:
    """Sum quantities per item name, keeping first-appearance order."""
    totals: dict[str, int] = {}
    for line in lines:
        name = normalize_item_name(line.name)
        totals[name] = totals.get(name, 0) + line.qty
    return totals
