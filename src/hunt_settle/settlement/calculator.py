"""Equal-split settlement calculator.

Every participant is refunded their supplies and receives the same share
of the net profit:

    corrected_net = total held loot - total supplies
    equal_share   = floor(corrected_net / n)
    fair_payout   = supplies + equal_share
    delta         = held loot value - fair_payout

Participants holding more than their fair payout (delta > 0) pay the
ones holding less (delta < 0). Flooring leaves a remainder in [0, n)
with the payers.
"""

from __future__ import annotations

import logging

from ..errors import EmptyRosterError
from .models import Position, SplitEntry, SplitOutcome, Transfer

logger = logging.getLogger(__name__)


def settle_transfers(positions: list[Position]) -> list[Transfer]:
    """Match payers to receivers with a two-pointer sweep.

    Both lists keep roster order, so the same positions always yield the
    same transfers. Produces at most payers + receivers - 1 transfers.
    """
    payers = [[p.name, p.delta] for p in positions if p.delta > 0]
    receivers = [[p.name, -p.delta] for p in positions if p.delta < 0]

    transfers: list[Transfer] = []
    i = j = 0
    while i < len(payers) and j < len(receivers):
        payer, receiver = payers[i], receivers[j]
        amount = min(payer[1], receiver[1])

        transfers.append(Transfer(from_name=payer[0], to_name=receiver[0], amount=amount))

        payer[1] -= amount
        receiver[1] -= amount
        if payer[1] == 0:
            i += 1
        if receiver[1] == 0:
            j += 1

    return transfers


def compute_split(entries: list[SplitEntry]) -> SplitOutcome:
    """Compute the equal split and the transfers that realize it.

    Args:
        entries: Participants in roster order with supplies and held
            loot value.

    Returns:
        SplitOutcome with totals, per-participant positions and transfers.

    Raises:
        EmptyRosterError: If there are no participants.
    """
    n = len(entries)
    if n == 0:
        raise EmptyRosterError("No players in party.")

    total_held = sum(e.held_loot_value for e in entries)
    total_supplies = sum(e.supplies for e in entries)
    corrected_net = total_held - total_supplies
    equal_share = corrected_net // n

    positions = []
    for e in entries:
        fair_payout = e.supplies + equal_share
        positions.append(Position(
            name=e.name,
            supplies=e.supplies,
            held_loot_value=e.held_loot_value,
            fair_payout=fair_payout,
            delta=e.held_loot_value - fair_payout,
        ))

    outcome = SplitOutcome(
        total_held_loot=total_held,
        total_supplies=total_supplies,
        corrected_net=corrected_net,
        equal_share=equal_share,
        positions=positions,
        transfers=settle_transfers(positions),
    )

    logger.debug(
        "Split %d ways: net=%d share=%d remainder=%d transfers=%d",
        n, corrected_net, equal_share, outcome.remainder, len(outcome.transfers),
    )
    return outcome
