"""Exceptions raised by the settlement engine."""

from __future__ import annotations


class SettlementError(ValueError):
    """Base class for fatal settlement input errors."""


class EmptyRosterError(SettlementError):
    """No valid participants were parsed from the party roster."""

    def __init__(self, message: str = "Party analyzer missing or no players parsed.") -> None:
        super().__init__(message)


class MissingLootSubmissionError(SettlementError):
    """A roster participant has no loot submission (not even an empty one)."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Missing looter paste for: {', '.join(self.missing)} "
            '(paste even if "Looted Items: None")'
        )


class MarketDataUnavailableError(RuntimeError):
    """A market-data call failed after retries."""
