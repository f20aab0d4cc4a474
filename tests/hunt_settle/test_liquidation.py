"""Tests for the liquidation planner."""

from __future__ import annotations

from src.common.models import Route
from src.hunt_settle.liquidation.planner import plan_liquidation, to_sell_instruction
from src.hunt_settle.valuation.models import FilledLevel, ItemQuote, ItemValuation, QuoteStatus


def _valuation(name, qty, route, total, **kwargs) -> ItemValuation:
    return ItemValuation(name=name, qty=qty, route=route, chosen_total=total, **kwargs)


class TestPlanLiquidation:
    def test_buckets_by_route(self):
        plan = plan_liquidation([
            _valuation("gold coin", 500, Route.CURRENCY, 500),
            _valuation("dragon shield", 1, Route.MARKET, 5200, market_total=5200, npc_total=4000),
            _valuation("small ruby", 2, Route.NPC, 500, npc_total=500),
            _valuation("strange amulet", 1, Route.UNMATCHED, 0),
        ])

        assert [s.name for s in plan.market] == ["dragon shield"]
        assert [s.name for s in plan.npc] == ["small ruby"]
        assert [(u.name, u.qty) for u in plan.unmatched] == [("strange amulet", 1)]

    def test_currency_left_out(self):
        plan = plan_liquidation([_valuation("crystal coin", 3, Route.CURRENCY, 30_000)])
        assert plan.market == [] and plan.npc == [] and plan.unmatched == []

    def test_sorted_by_total_descending(self):
        plan = plan_liquidation([
            _valuation("cheap", 1, Route.NPC, 10),
            _valuation("pricey", 1, Route.NPC, 900),
            _valuation("middle", 1, Route.NPC, 300),
            _valuation("also middle", 1, Route.NPC, 300),
        ])
        assert [s.name for s in plan.npc] == ["pricey", "middle", "also middle", "cheap"]

    def test_instruction_carries_audit_fields(self):
        quote = ItemQuote(
            name="item x",
            status=QuoteStatus.RESOLVED,
            item_id=42,
            npc_unit_price=2000,
            best_npc="Vendor (2000)",
            buy_offer=2200,
            sell_offer=2600,
        )
        valuation = _valuation(
            "item x", 3, Route.MARKET, 6400,
            npc_unit_price=2000,
            npc_total=6000,
            market_total=6400,
            used_levels=[FilledLevel(2200, 1), FilledLevel(2100, 2)],
            quote=quote,
        )
        instruction = to_sell_instruction(valuation)

        assert instruction.item_id == 42
        assert instruction.npc_total == 6000
        assert instruction.market_total == 6400
        assert instruction.best_npc == "Vendor (2000)"
        assert instruction.buy_offer == 2200
        assert [(lv.price, lv.quantity) for lv in instruction.used_levels] == [(2200, 1), (2100, 2)]
        assert instruction.model_dump(mode="json")["route"] == "market"
