"""Configuration management for the market-data layer."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parents[3]
load_dotenv(_PROJECT_ROOT / ".env")


@dataclass
class Config:
    """Central configuration loaded from environment variables."""

    # Tibia Market API
    market_base_url: str = field(
        default_factory=lambda: os.getenv(
            "TIBIA_MARKET_BASE_URL", "https://api.tibiamarket.top"
        )
    )
    world: str = field(
        default_factory=lambda: os.getenv("MARKET_WORLD", "Secura")
    )

    # Requests
    request_timeout: int = 30
    rate_limit_rpm: int = 20

    # Cache
    metadata_ttl_seconds: float = 3600.0

    def __post_init__(self) -> None:
        """Load overrides from environment."""
        if timeout := os.getenv("REQUEST_TIMEOUT"):
            self.request_timeout = int(timeout)
        if rpm := os.getenv("RATE_LIMIT_REQUESTS_PER_MINUTE"):
            self.rate_limit_rpm = int(rpm)
        if ttl := os.getenv("METADATA_TTL_SECONDS"):
            self.metadata_ttl_seconds = float(ttl)
        self.market_base_url = self.market_base_url.rstrip("/")
