# Common utilities and shared modules
"""
Shared components used across the settlement engine:
- Result contract (Pydantic schemas)
- Logging configuration
- Project configuration
"""

from .config import settings, Settings, PROJECT_ROOT
from .logging import setup_logging

__all__ = [
    "settings",
    "Settings",
    "PROJECT_ROOT",
    "setup_logging",
]
