"""
Daily Settlement Rate Limiter.

A single process-wide counter of authorization attempts per calendar day.

Policy:
    Every call to ``allow()`` consumes one unit of quota, including attempts
    that are later rejected by amount validation or the ledger, and attempts
    that are themselves over the limit. The counter is a coarse guard against
    retry storms, not a count of successful settlements.

    The counter resets the first time it is consulted on a new local calendar
    day. State lives in memory only and is lost on restart.
"""

import threading
from datetime import date
from typing import Callable, Optional


class RateLimiter:
    """
    Thread-safe daily attempt counter.

    Args:
        daily_limit: Maximum attempts allowed per calendar day
        today: Clock returning the current local date (injectable for tests)
    """

    def __init__(
        self,
        daily_limit: int,
        today: Optional[Callable[[], date]] = None,
    ):
        self.daily_limit = daily_limit
        self._today = today or date.today
        self._lock = threading.Lock()
        self._day_key = self._day()
        self._count = 0

    def _day(self) -> str:
        return self._today().isoformat()

    def allow(self) -> bool:
        """Count one attempt and report whether it is within today's limit."""
        with self._lock:
            day_key = self._day()
            if day_key != self._day_key:
                self._day_key = day_key
                self._count = 0
            self._count += 1
            return self._count <= self.daily_limit

    @property
    def count(self) -> int:
        """Attempts counted so far today."""
        with self._lock:
            return self._count

    @property
    def remaining(self) -> int:
        """Attempts still allowed today."""
        with self._lock:
            return max(self.daily_limit - self._count, 0)

    def reset(self) -> None:
        with self._lock:
            self._day_key = self._day()
            self._count = 0
