"""Project configuration and paths.

Loads settings from config/settings.yaml and environment variables.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# === Paths ===
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

# Load .env from project root
load_dotenv(PROJECT_ROOT / ".env")


class ParserSettings(BaseModel):
    """Settings for the analyzer text parsers."""
    lookahead_lines: int = Field(default=12, ge=1)
    heading_keywords: list[str] = Field(default_factory=lambda: [
        "Session data",
        "Session",
        "Loot Type",
        "Looted Items",
        "Killed Monsters",
        "Damage",
        "Healing",
    ])
    loot_type_tokens: list[str] = Field(default_factory=lambda: ["Market", "NPC", "Custom"])


class ValuationSettings(BaseModel):
    """Settings for item valuation."""
    # Fixed-value currency items, keyed by singular normalized name
    currency: dict[str, int] = Field(default_factory=lambda: {
        "gold coin": 1,
        "platinum coin": 100,
        "crystal coin": 10_000,
    })
    use_depth: bool = True


class Settings(BaseModel):
    """Top-level application settings."""
    parser: ParserSettings = Field(default_factory=ParserSettings)
    valuation: ValuationSettings = Field(default_factory=ValuationSettings)

    @classmethod
    def load(cls, path: str | Path | None = None) -> Settings:
        """Load settings from config/settings.yaml, falling back to defaults."""
        settings_path = Path(path) if path else CONFIG_DIR / "settings.yaml"
        if settings_path.exists():
            with open(settings_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        return cls()


# Singleton settings instance
settings = Settings.load()
