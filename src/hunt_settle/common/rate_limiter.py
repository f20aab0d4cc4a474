"""Token-bucket rate limiter for the externally throttled market API."""

from __future__ import annotations

import time
import threading


class RateLimiter:
    """Thread-safe rate limiter spacing calls evenly.

    Args:
        requests_per_minute: Maximum requests allowed per minute. Values
            below one are clamped to one request per minute.
    """

    def __init__(self, requests_per_minute: int = 20) -> None:
        self._interval = 60.0 / max(requests_per_minute, 1)
        self._last_request_time: float | None = None
        self._lock = threading.Lock()

    @property
    def interval(self) -> float:
        return self._interval

    def wait(self) -> None:
        """Block until the next request is allowed."""
        with self._lock:
            now = time.monotonic()
            if self._last_request_time is not None:
                elapsed = now - self._last_request_time
                if elapsed < self._interval:
                    time.sleep(self._interval - elapsed)
            self._last_request_time = time.monotonic()
