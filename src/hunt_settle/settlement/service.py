"""Settlement run orchestration.

One run goes: roster + loot submissions -> distinct item quotes (market
lookups) -> per-participant valuations -> equal split -> liquidation
plan -> frozen SettlementResult. Runs share no state; a run that is
aborted is simply started again.
"""

from __future__ import annotations

import logging
from typing import Mapping

from ...common.config import Settings, settings as default_settings
from ...common.models import (
    ParticipantSettlement,
    SettlementResult,
    TransferRecord,
)
from ..common.gold import format_gold
from ..errors import EmptyRosterError, MissingLootSubmissionError
from ..liquidation.planner import plan_liquidation
from ..log_parser.loot import aggregate_loot, parse_hunt_analyzer
from ..log_parser.models import LootLine, RosterEntry
from ..log_parser.roster import parse_party_analyzer
from ..market.base import MarketDataSource
from ..valuation.resolver import ValuationResolver
from .calculator import compute_split
from .models import SplitEntry

logger = logging.getLogger(__name__)


class SettlementService:
    """Compute hunt settlements against a market data source.

    Usage:
        with TibiaMarketClient() as market:
            service = SettlementService(market)
            result = service.settle_from_text(party_text, {"Knight": knight_text})
        for t in result.transfers:
            print(t.from_name, "->", t.to_name, t.amount)
    """

    def __init__(
        self,
        source: MarketDataSource,
        settings: Settings | None = None,
    ) -> None:
        self.source = source
        self.settings = settings or default_settings
        self.resolver = ValuationResolver(source, self.settings.valuation)

    @staticmethod
    def match_submissions(
        roster: list[RosterEntry],
        loot_by_name: Mapping[str, list[LootLine]],
    ) -> dict[str, list[LootLine]]:
        """Pair each roster participant with their loot submission.

        Names match case-insensitively.

        Raises:
            EmptyRosterError: If the roster is empty.
            MissingLootSubmissionError: If any participant has no submission.
        """
        if not roster:
            raise EmptyRosterError()

        by_key = {name.casefold(): lines for name, lines in loot_by_name.items()}
        missing = [p.name for p in roster if p.name.casefold() not in by_key]
        if missing:
            raise MissingLootSubmissionError(missing)

        return {p.name: list(by_key[p.name.casefold()]) for p in roster}

    def settle(
        self,
        roster: list[RosterEntry],
        loot_by_name: Mapping[str, list[LootLine]],
    ) -> SettlementResult:
        """Run a full settlement.

        Args:
            roster: Participants in roster order.
            loot_by_name: Loot submission per participant name (an empty
                list for "Looted Items: None").

        Returns:
            Frozen SettlementResult.
        """
        submissions = self.match_submissions(roster, loot_by_name)
        qty_by_participant = {
            name: aggregate_loot(lines) for name, lines in submissions.items()
        }

        all_names = [
            item for qty_by_name in qty_by_participant.values() for item in qty_by_name
        ]
        resolved = self.resolver.resolve(all_names)

        entries: list[SplitEntry] = []
        sell_plans = {}
        for participant in roster:
            valuations = self.resolver.value_loot(resolved, qty_by_participant[participant.name])
            entries.append(SplitEntry(
                name=participant.name,
                supplies=participant.supplies,
                held_loot_value=sum(v.chosen_total for v in valuations),
            ))
            sell_plans[participant.name] = plan_liquidation(valuations)

        outcome = compute_split(entries)

        result = SettlementResult(
            as_of=resolved.as_of,
            total_held_loot=outcome.total_held_loot,
            total_supplies=outcome.total_supplies,
            corrected_net=outcome.corrected_net,
            equal_share=outcome.equal_share,
            per_participant=[
                ParticipantSettlement(
                    name=p.name,
                    supplies_cost=p.supplies,
                    held_loot_value=p.held_loot_value,
                    fair_payout=p.fair_payout,
                    delta=p.delta,
                )
                for p in outcome.positions
            ],
            transfers=[
                TransferRecord(from_name=t.from_name, to_name=t.to_name, amount=t.amount)
                for t in outcome.transfers
            ],
            sell_instructions_by_participant=sell_plans,
            unmatched_item_names=resolved.unmatched_names,
            degraded_item_names=resolved.degraded_names,
        )

        logger.info(
            "Settlement for %d players: loot=%s, supplies=%s, net=%s, share=%s, %d transfers",
            len(roster),
            format_gold(result.total_held_loot),
            format_gold(result.total_supplies),
            format_gold(result.corrected_net),
            format_gold(result.equal_share),
            len(result.transfers),
        )
        return result

    def settle_from_text(
        self,
        party_text: str,
        loot_texts: Mapping[str, str],
    ) -> SettlementResult:
        """Parse analyzer pastes and settle.

        Args:
            party_text: Party hunt analyzer paste.
            loot_texts: Hunt analyzer paste per participant name.
        """
        roster = parse_party_analyzer(party_text, self.settings.parser)
        loot_by_name = {
            name: parse_hunt_analyzer(text, self.settings.parser)
            for name, text in loot_texts.items()
        }
        return self.settle(roster, loot_by_name)
