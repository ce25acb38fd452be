"""Sliding-window request budget for the vision model.

One limiter is built by the composition root (``screensight.dependencies``)
and passed to every client that talks to the model. The clock is injectable
so tests can move time without sleeping.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

_MINUTE_S = 60.0
_HOUR_S = 60.0 * 60.0


class RateLimiter:
    """Per-minute and per-hour caps over a list of request timestamps."""

    def __init__(
        self,
        max_per_minute: int = 5,
        max_per_hour: int = 50,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_per_minute = max_per_minute
        self.max_per_hour = max_per_hour
        self._clock = clock
        self._timestamps: list[float] = []
        # Guards the check-then-record pair when called from worker threads
        self._lock = threading.Lock()

    def _purge(self, now: float) -> None:
        cutoff = now - _HOUR_S
        self._timestamps = [ts for ts in self._timestamps if ts > cutoff]

    def _recent(self, now: float) -> list[float]:
        cutoff = now - _MINUTE_S
        return [ts for ts in self._timestamps if ts > cutoff]

    def can_proceed(self) -> bool:
        now = self._clock()
        self._purge(now)
        return (
            len(self._recent(now)) < self.max_per_minute
            and len(self._timestamps) < self.max_per_hour
        )

    def record_request(self) -> None:
        self._timestamps.append(self._clock())

    def wait_time_ms(self) -> int:
        """Milliseconds until a slot frees up; 0 when a request may go now."""
        if self.can_proceed():
            return 0
        now = self._clock()
        recent = self._recent(now)
        if len(recent) >= self.max_per_minute:
            return max(0, int(round((min(recent) + _MINUTE_S - now) * 1000)))
        return int(_MINUTE_S * 1000)

    def try_acquire(self) -> bool:
        """Atomically check the budget and record a request when allowed."""
        with self._lock:
            if not self.can_proceed():
                logger.warning(
                    "Rate limit reached (%d/min, %d/hour)", self.max_per_minute, self.max_per_hour
                )
                return False
            self.record_request()
            return True

    def status(self) -> dict[str, int | bool]:
        with self._lock:
            return {"can_proceed": self.can_proceed(), "wait_time_ms": self.wait_time_ms()}

    @property
    def request_count(self) -> int:
        return len(self._timestamps)
