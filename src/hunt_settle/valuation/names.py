"""Item name helpers: currency table and lookup variants."""

from __future__ import annotations


def currency_value(name: str, table: dict[str, int]) -> int | None:
    """Fixed gp value of a currency item, singular or plural.

    >>> currency_value("platinum coins", {"platinum coin": 100})
    100
    """
    if name in table:
        return table[name]
    if name.endswith("s") and name[:-1] in table:
        return table[name[:-1]]
    return None


def candidate_names(name: str) -> list[str]:
    """Lookup variants for a loot name, most specific first.

    Loot logs use plurals ("dragon hams", "small rubies") while the
    item database uses singular names.
    """
    out = [name]
    if name.endswith("coins"):
        out.append(name[: -len("coins")] + "coin")
    if name.endswith("ies"):
        out.append(name[:-3] + "y")
    if name.endswith("es"):
        out.append(name[:-2])
    if name.endswith("s"):
        out.append(name[:-1])
    return [n for n in dict.fromkeys(out) if n]
