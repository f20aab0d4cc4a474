"""Shared test fixtures for the hunt settlement engine."""

import json
import sys
from pathlib import Path

import pytest

# Ensure src is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.common.config import Settings
from src.hunt_settle.market.static_source import StaticMarketSource


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the test fixtures directory."""
    return PROJECT_ROOT / "tests" / "fixtures"


@pytest.fixture
def default_settings() -> Settings:
    """Settings with built-in defaults (ignores config/settings.yaml)."""
    return Settings()


@pytest.fixture
def party_text(fixtures_dir) -> str:
    return (fixtures_dir / "party_analyzer.txt").read_text(encoding="utf-8")


@pytest.fixture
def loot_texts(fixtures_dir) -> dict[str, str]:
    return {
        "Knight Name": (fixtures_dir / "looter_knight.txt").read_text(encoding="utf-8"),
        "Parcel Macius": (fixtures_dir / "looter_parcel.txt").read_text(encoding="utf-8"),
    }


@pytest.fixture
def snapshot_data(fixtures_dir) -> dict:
    with open(fixtures_dir / "market_snapshot.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def static_market(snapshot_data) -> StaticMarketSource:
    """Market source serving the fixture snapshot."""
    return StaticMarketSource(snapshot_data)
