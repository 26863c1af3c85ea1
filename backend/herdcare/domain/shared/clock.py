"""
Injectable clock so services never read the system time directly.

Reminder classification and recency checks depend on "now"; tests pin it with
FixedClock.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta

from .base import ensure_utc, utc_now


class Clock(ABC):
    """Abstract clock interface."""

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time as an aware UTC datetime."""
        ...


class SystemClock(Clock):
    """Production clock returning the actual system time."""

    def now(self) -> datetime:
        return utc_now()


class FixedClock(Clock):
    """Clock frozen at a given instant; can be advanced manually."""

    def __init__(self, fixed_time: datetime) -> None:
        self._time = ensure_utc(fixed_time)

    def now(self) -> datetime:
        return self._time

    def advance(self, delta: timedelta) -> None:
        self._time = self._time + delta
