"""Liquidation planner.

Turns one participant's valued loot into sell lists: what to put into
market buy orders, what to sell to NPCs, and what could not be
identified and needs a manual price. Currency is already gold and is
left out.
"""

from __future__ import annotations

from ...common.models import (
    ConsumedLevel,
    ParticipantSellPlan,
    Route,
    SellInstruction,
    UnmatchedLoot,
)
from ..valuation.models import ItemValuation


def to_sell_instruction(valuation: ItemValuation) -> SellInstruction:
    quote = valuation.quote
    return SellInstruction(
        name=valuation.name,
        qty=valuation.qty,
        item_id=quote.item_id if quote else None,
        route=valuation.route,
        chosen_total=valuation.chosen_total,
        market_total=valuation.market_total,
        npc_unit_price=valuation.npc_unit_price,
        npc_total=valuation.npc_total,
        buy_offer=quote.buy_offer if quote else None,
        sell_offer=quote.sell_offer if quote else None,
        month_average_buy=quote.month_average_buy if quote else None,
        month_average_sell=quote.month_average_sell if quote else None,
        best_npc=quote.best_npc if quote else "",
        used_levels=[
            ConsumedLevel(price=level.price, quantity=level.quantity)
            for level in valuation.used_levels
        ],
    )


def plan_liquidation(valuations: list[ItemValuation]) -> ParticipantSellPlan:
    """Bucket a participant's valuations by sell venue.

    Market and NPC lists are sorted by chosen total, highest first;
    equal totals keep loot order.
    """
    market: list[SellInstruction] = []
    npc: list[SellInstruction] = []
    unmatched: list[UnmatchedLoot] = []

    for valuation in valuations:
        if valuation.route == Route.MARKET:
            market.append(to_sell_instruction(valuation))
        elif valuation.route == Route.NPC:
            npc.append(to_sell_instruction(valuation))
        elif valuation.route == Route.UNMATCHED:
            unmatched.append(UnmatchedLoot(name=valuation.name, qty=valuation.qty))

    market.sort(key=lambda s: s.chosen_total, reverse=True)
    npc.sort(key=lambda s: s.chosen_total, reverse=True)

    return ParticipantSellPlan(market=market, npc=npc, unmatched=unmatched)
