"""Instant-sale valuation against buy-side order-book depth."""

from __future__ import annotations

from ..market.models import OrderLevel
from .models import FilledLevel


def instant_sell_value(
    levels: list[OrderLevel],
    qty: int,
) -> tuple[int, list[FilledLevel]]:
    """Proceeds of selling ``qty`` units immediately into buy orders.

    Buy orders are filled best price first (newest first on equal
    price). Units beyond the available depth are worth nothing.

    Returns:
        (total proceeds, levels consumed in fill order)
    """
    ordered = sorted(levels, key=lambda lv: (-lv.price, -lv.timestamp))

    remaining = qty
    total = 0
    used: list[FilledLevel] = []
    for level in ordered:
        if remaining <= 0:
            break
        if level.quantity <= 0 or level.price <= 0:
            continue
        take = min(remaining, level.quantity)
        total += take * level.price
        remaining -= take
        used.append(FilledLevel(price=level.price, quantity=take))

    return total, used
