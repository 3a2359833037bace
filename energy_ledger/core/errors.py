"""
Error taxonomy and operation results.

Ledger operations that can be refused return an OperationResult instead of
raising, so callers at the presentation layer never have to catch domain
exceptions. The error inside a failed result explains the refusal.
"""

from dataclasses import dataclass
from typing import Any, Optional


class LedgerError(Exception):
    """Base class for refused ledger operations."""


class InvalidUsageRequest(LedgerError):
    """Usage amount exceeds the customer's remaining allocation."""

    def __init__(self, message: str, requested=None, remaining=None):
        super().__init__(message)
        self.requested = requested
        self.remaining = remaining


class InvalidPaymentRequest(LedgerError):
    """Bill index out of range or tendered amount below the bill amount."""

    def __init__(self, message: str, bill_index: Optional[int] = None):
        super().__init__(message)
        self.bill_index = bill_index


class ReportIOFailure(LedgerError):
    """Report destination could not be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a fallible ledger operation."""
    ok: bool
    value: Any = None
    error: Optional[LedgerError] = None

    def __post_init__(self):
        if self.ok and self.error is not None:
            raise ValueError("successful result cannot carry an error")
        if not self.ok and self.error is None:
            raise ValueError("failed result must carry an error")

    def __bool__(self) -> bool:
        return self.ok

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""

    @classmethod
    def success(cls, value: Any = None) -> "OperationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: LedgerError) -> "OperationResult":
        return cls(ok=False, error=error)
