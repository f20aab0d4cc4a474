"""Gold amount formatting."""

from __future__ import annotations


def format_gold(amount: int | float | None) -> str:
    """Format a gold amount with Tibia-style suffixes (k, kk, b).

    Examples: 950 -> "950", 1500 -> "1.50k", 2_000_000 -> "2.00kk".
    Negative amounts keep their sign.
    """
    if amount is None:
        return "n/a"
    sign = "-" if amount < 0 else ""
    n = abs(amount)
    if n >= 1e9:
        return f"{sign}{n / 1e9:.2f}b"
    if n >= 1e6:
        return f"{sign}{n / 1e6:.2f}kk"
    if n >= 1e3:
        return f"{sign}{n / 1e3:.2f}k"
    return f"{sign}{int(n)}"


def format_int(amount: int) -> str:
    """Format an integer with thousands separators (e.g. 1,234,567)."""
    return f"{int(amount):,}"
