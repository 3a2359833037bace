"""
Customer accounts.

A customer has an energy allocation for the current period, the usage
recorded against it, and an append-only history of bills and maintenance.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from .billing import Bill, MaintenanceEntry
from .catalog import EnergyKind
from .clock import Clock, SystemClock
from .errors import InvalidPaymentRequest, InvalidUsageRequest, OperationResult
from .money import Number, to_decimal

PROVINCES = (
    "Alberta",
    "British Columbia",
    "Manitoba",
    "New Brunswick",
    "Newfoundland and Labrador",
    "Northwest Territories",
    "Nova Scotia",
    "Nunavut",
    "Ontario",
    "Prince Edward Island",
    "Quebec",
    "Saskatchewan",
    "Yukon",
)



def _finite_amount(value: Number) -> Optional[Decimal]:
    """Convert a tendered or consumed amount, or None if it is not a finite number."""
    try:
        amount = to_decimal(value)
    except (InvalidOperation, TypeError):
        return None
    return amount if amount.is_finite() else None


@dataclass(eq=False)
class Customer:
    """A billed account with an energy allocation."""
    customer_id: int
    name: str
    province: str
    email: str
    address: str
    energy_kind: EnergyKind
    allocated: Decimal
    used: Decimal = Decimal("0")
    bills: List[Bill] = field(default_factory=list)
    maintenance_log: List[MaintenanceEntry] = field(default_factory=list)
    reminder_sent: bool = False
    clock: Clock = field(default_factory=SystemClock, repr=False)

    def __post_init__(self):
        """Validate identity, region and allocation."""
        if isinstance(self.customer_id, bool) or not isinstance(self.customer_id, int):
            raise ValueError("customer_id must be an integer")
        if self.customer_id <= 0:
            raise ValueError("customer_id must be > 0")
        if self.province not in PROVINCES:
            raise ValueError(f"Unknown province: {self.province}")
        if not isinstance(self.energy_kind, EnergyKind):
            self.energy_kind = EnergyKind.parse(self.energy_kind)
        self.allocated = to_decimal(self.allocated)
        self.used = to_decimal(self.used)
        if self.allocated <= 0:
            raise ValueError("allocated must be > 0")
        if self.used < 0:
            raise ValueError("used cannot be negative")
        if self.used > self.allocated:
            raise ValueError("used cannot exceed allocated")

    @property
    def remaining(self) -> Decimal:
        return self.allocated - self.used

    def record_usage(self, amount: Number) -> OperationResult:
        """Record energy consumed against the allocation.

        Args:
            amount: Units consumed

        Returns:
            Successful result with the new usage total, or a failed result
            carrying InvalidUsageRequest when the amount is not a finite number
            or does not fit in the remaining allocation. A failed call changes nothing.
        """
        requested = _finite_amount(amount)
        if requested is None:
            return OperationResult.failure(InvalidUsageRequest(
                f"Usage must be a finite number: {amount!r}",
                requested=None,
                remaining=self.remaining,
            ))
        if requested < 0:
            return OperationResult.failure(InvalidUsageRequest(
                f"Usage cannot be negative: {requested}",
                requested=requested,
                remaining=self.remaining,
            ))
        if requested > self.remaining:
            return OperationResult.failure(InvalidUsageRequest(
                f"Usage of {requested} units exceeds remaining allocation of "
                f"{self.remaining} units for customer {self.customer_id}",
                requested=requested,
                remaining=self.remaining,
            ))
        self.used += requested
        return OperationResult.success(self.used)

    def issue_bill(self, rate: Number, issued_at: Optional[datetime] = None) -> Bill:
        """Bill the current usage at ``rate`` and start a new period.

        Always appends a bill, even a zero-amount one; skipping idle
        customers is the caller's decision.
        """
        bill = Bill(self.used * to_decimal(rate), issued_at=issued_at, clock=self.clock)
        self.bills.append(bill)
        self.used = Decimal("0")
        return bill

    def pay(self, bill_index: int, amount: Number) -> OperationResult:
        """Settle one bill in full.

        Any successful payment clears the reminder latch, whichever bill
        it settles.

        Args:
            bill_index: Zero-based position in the bill history
            amount: Tendered amount

        Returns:
            Successful result with the paid Bill, or a failed result carrying
            InvalidPaymentRequest. A failed call changes nothing.
        """
        if not 0 <= bill_index < len(self.bills):
            return OperationResult.failure(InvalidPaymentRequest(
                f"No bill #{bill_index} for customer {self.customer_id}",
                bill_index=bill_index,
            ))
        tendered = _finite_amount(amount)
        if tendered is None:
            return OperationResult.failure(InvalidPaymentRequest(
                f"Payment must be a finite number: {amount!r}",
                bill_index=bill_index,
            ))
        bill = self.bills[bill_index]
        if not bill.covers(tendered):
            return OperationResult.failure(InvalidPaymentRequest(
                f"Payment of ${tendered:.2f} does not cover "
                f"bill amount ${bill.amount:.2f}",
                bill_index=bill_index,
            ))
        bill.mark_paid()
        self.reminder_sent = False
        return OperationResult.success(bill)

    def add_maintenance(self, description: str, cost: Number) -> MaintenanceEntry:
        entry = MaintenanceEntry(
            timestamp=self.clock.now(),
            description=description,
            cost=to_decimal(cost),
        )
        self.maintenance_log.append(entry)
        return entry

    def total_owed(self) -> Decimal:
        """Sum of all unpaid bill amounts."""
        return sum((bill.amount for bill in self.bills if not bill.paid), Decimal("0"))

    def overdue_bills(self) -> List[Bill]:
        return [bill for bill in self.bills if bill.is_overdue()]

    def has_overdue(self) -> bool:
        return any(bill.is_overdue() for bill in self.bills)

    def generate_reminder(self) -> str:
        """Compose the overdue-payment email, at most once per overdue episode.

        Returns an empty string when nothing is overdue or a reminder has
        already gone out since the last payment.
        """
        if not self.has_overdue() or self.reminder_sent:
            return ""
        self.reminder_sent = True

        lines = [
            f"To: {self.email}",
            "Subject: Your energy payment is overdue",
            "",
            f"Hi {self.name},",
            "",
            "Just a reminder that you have unpaid bills that are now overdue:",
            "",
        ]
        for bill in self.overdue_bills():
            lines.append(
                f"Bill from {bill.format_date()} - Amount: ${bill.amount:.2f}"
                f" - {bill.days_overdue()} days overdue"
            )
        lines.extend([
            "",
            "Please pay ASAP to avoid service interruption.",
            "",
            "Thanks,",
            "Customer Service Team",
        ])
        return "\n".join(lines)
