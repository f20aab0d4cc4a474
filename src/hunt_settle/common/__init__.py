"""Common utilities shared across the settlement engine modules."""

from .config import Config
from .gold import format_gold, format_int
from .http_client import HTTPClient
from .rate_limiter import RateLimiter

__all__ = ["Config", "HTTPClient", "RateLimiter", "format_gold", "format_int"]
