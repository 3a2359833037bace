"""
Bills and maintenance entries.

A bill is one billing-cycle charge. Its amount is fixed when it is issued and
the only change it ever sees is being paid. Whether it is overdue depends on
the current time, so it is computed on every query and never stored.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from .clock import Clock, SystemClock
from .money import Number, quantize_currency, to_decimal

OVERDUE_AFTER_DAYS = 30
SECONDS_PER_DAY = 60 * 60 * 24


def _local_naive(moment: datetime) -> datetime:
    """Timezone-aware times are converted to naive local time; naive ones pass through."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


class Bill:
    """One charge for a billing period, Unpaid until settled in full."""

    def __init__(
        self,
        amount: Number,
        issued_at: Optional[datetime] = None,
        clock: Optional[Clock] = None,
        paid: bool = False,
    ):
        """Create a bill.

        Args:
            amount: Charge in currency units, rounded to cents
            issued_at: Issue timestamp (defaults to the clock's current time).
                Aware timestamps are stored as naive local time
            clock: Time source for age calculations
            paid: Initial payment state, for importing settled history

        Raises:
            ValueError: If amount is negative
        """
        value = quantize_currency(amount)
        if value < 0:
            raise ValueError("Bill amount cannot be negative")
        self._clock = clock or SystemClock()
        self._amount = value
        self._issued_at = _local_naive(issued_at or self._clock.now())
        self._paid = paid

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def issued_at(self) -> datetime:
        return self._issued_at

    @property
    def paid(self) -> bool:
        return self._paid

    def days_since(self) -> int:
        """Whole days elapsed since the bill was issued."""
        elapsed = (_local_naive(self._clock.now()) - self._issued_at).total_seconds()
        return int(elapsed // SECONDS_PER_DAY)

    def is_overdue(self) -> bool:
        """Unpaid and more than 30 whole days old."""
        return self.days_since() > OVERDUE_AFTER_DAYS and not self._paid

    def days_overdue(self) -> int:
        """Days past the 30-day grace period (0 if not yet past it)."""
        return max(self.days_since() - OVERDUE_AFTER_DAYS, 0)

    def covers(self, tendered: Number) -> bool:
        """Whether a tendered amount settles this bill. Partial payments never do."""
        return to_decimal(tendered) >= self._amount

    def mark_paid(self) -> None:
        self._paid = True

    def format_date(self) -> str:
        return self._issued_at.strftime("%Y-%m-%d")

    def __repr__(self) -> str:
        state = "paid" if self._paid else "unpaid"
        return f"Bill(amount={self._amount}, issued_at={self.format_date()}, {state})"


@dataclass(frozen=True)
class MaintenanceEntry:
    """Record of maintenance work done for a customer."""
    timestamp: datetime
    description: str
    cost: Decimal

    def __post_init__(self):
        cost = quantize_currency(self.cost)
        if cost < 0:
            raise ValueError("Maintenance cost cannot be negative")
        object.__setattr__(self, "cost", cost)
