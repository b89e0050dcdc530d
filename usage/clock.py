"""
Clock abstraction

All "what day is it" decisions (daily quota reset, history retention,
analytics buckets) go through a Clock so tests can pin time. Dates are UTC
calendar dates.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional


class Clock(ABC):
    """Source of the current time"""

    @abstractmethod
    def now(self) -> datetime:
        """Current time as an aware UTC datetime"""

    def today(self) -> str:
        """Current UTC date as YYYY-MM-DD"""
        return self.now().date().isoformat()

    def days_ago(self, days: int) -> str:
        """UTC date `days` calendar days before today, as YYYY-MM-DD"""
        return (self.now().date() - timedelta(days=days)).isoformat()

    def timestamp_ms(self) -> int:
        """Current time in epoch milliseconds"""
        return int(self.now().timestamp() * 1000)


class SystemClock(Clock):
    """Wall clock"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Settable clock for deterministic tests and replays"""

    def __init__(self, current: Optional[datetime] = None):
        self._current = self._as_utc(current or datetime.now(timezone.utc))

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime):
        self._current = self._as_utc(current)

    def advance(self, **kwargs):
        """Move forward by a timedelta given as keyword arguments (days=1, hours=3, ...)"""
        self._current = self._current + timedelta(**kwargs)


# Global clock instance
_clock: Optional[Clock] = None


def get_clock() -> Clock:
    """Get the global clock instance"""
    global _clock
    if _clock is None:
        _clock = SystemClock()
    return _clock
