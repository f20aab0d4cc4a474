"""Line classification for analyzer pastes.

Both analyzer formats are read line by line. Each raw line is tagged
once here, so the roster and loot parsers only walk a list of typed
lines instead of re-running patterns:

    Blank      empty or whitespace-only
    StatLine   "Supplies: -1,234"   (kind="supplies", value=-1234)
    ItemLine   "9x a gold coin"     (qty=9, name="gold coin")
    Heading    section titles, "Key: text" lines, loot-type tokens
    TextLine   anything else, e.g. a participant header
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from ...common.config import ParserSettings, settings

_STAT_RE = re.compile(
    r"^(?P<kind>[A-Za-z][A-Za-z /]*?):\s*(?P<value>-?\d[\d,]*)\s*$"
)
_ITEM_RE = re.compile(r"^(?P<qty>\d+)\s*x\s+(?P<name>.+)$", re.IGNORECASE)
_ARTICLE_RE = re.compile(r"^(?:a|an)\s+")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Heading:
    text: str


@dataclass(frozen=True)
class StatLine:
    kind: str
    value: int


@dataclass(frozen=True)
class ItemLine:
    qty: int
    name: str


@dataclass(frozen=True)
class TextLine:
    text: str


Line = Union[Blank, Heading, StatLine, ItemLine, TextLine]


def normalize_item_name(raw: str) -> str:
    """Lower-case, drop a leading article and collapse whitespace.

    "A  Gold Coin" -> "gold coin"
    """
    s = str(raw).strip().lower()
    s = _ARTICLE_RE.sub("", s)
    return _WHITESPACE_RE.sub(" ", s).strip()


def parse_int_comma(value: str) -> int | None:
    """Parse a comma-grouped integer such as "-1,234"; None if invalid."""
    cleaned = str(value).replace(",", "").strip()
    try:
        return int(cleaned)
    except ValueError:
        return None


def split_lines(text: str | None) -> list[str]:
    """Normalize line endings and tabs, and split into lines."""
    whole = str(text or "").replace("\r\n", "\n").replace("\r", "\n")
    return [line.replace("\t", "    ").rstrip() for line in whole.split("\n")]


def _is_heading(text: str, parser_settings: ParserSettings) -> bool:
    if ":" in text:
        return True
    lowered = text.lower()
    for keyword in parser_settings.heading_keywords:
        if re.match(rf"{re.escape(keyword.lower())}\b", lowered):
            return True
    return any(lowered == token.lower() for token in parser_settings.loot_type_tokens)


def classify_line(raw: str, parser_settings: ParserSettings | None = None) -> Line:
    """Tag a single raw line."""
    parser_settings = parser_settings or settings.parser
    text = raw.replace("\t", "    ").strip()
    if not text:
        return Blank()

    m = _STAT_RE.match(text)
    if m:
        value = parse_int_comma(m.group("value"))
        if value is not None:
            return StatLine(kind=m.group("kind").strip().lower(), value=value)

    m = _ITEM_RE.match(text)
    if m:
        return ItemLine(qty=int(m.group("qty")), name=normalize_item_name(m.group("name")))

    if _is_heading(text, parser_settings):
        return Heading(text=text)

    return TextLine(text=text)


def classify_lines(
    text: str | None,
    parser_settings: ParserSettings | None = None,
) -> list[Line]:
    return [classify_line(line, parser_settings) for line in split_lines(text)]
