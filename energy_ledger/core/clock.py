"""
Time sources for billing-age calculations.

Bills and customers read the current time through a Clock so that elapsed
time can be simulated.
"""

from datetime import datetime, timedelta
from typing import Optional, Protocol


class Clock(Protocol):
    """Anything that can tell the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock. Every call reads the current local time."""

    def now(self) -> datetime:
        return datetime.now()

    def __repr__(self) -> str:
        return "SystemClock()"


class ManualClock:
    """Clock that only moves when told to.

    Used by tests and the demo seeder to age bills without waiting.
    """

    def __init__(self, start: Optional[datetime] = None):
        self._current = start or datetime.now()

    def now(self) -> datetime:
        return self._current

    def advance(self, days: float = 0, seconds: float = 0) -> datetime:
        """Move the clock forward and return the new time."""
        if days < 0 or seconds < 0:
            raise ValueError("ManualClock cannot move backwards")
        self._current += timedelta(days=days, seconds=seconds)
        return self._current

    def __repr__(self) -> str:
        return f"ManualClock({self._current.isoformat()})"
