"""Liquidation Planner Module - per-participant sell lists."""

from .planner import plan_liquidation, to_sell_instruction

__all__ = ["plan_liquidation", "to_sell_instruction"]
