"""
Core modules for Energy Ledger.

This package contains the in-memory domain model: customers, bills,
trades, the rate card, and the directory that aggregates them.
"""

from .billing import Bill, MaintenanceEntry, OVERDUE_AFTER_DAYS
from .catalog import DEFAULT_CATALOG, EnergyKind, PriceCatalog
from .clock import Clock, ManualClock, SystemClock
from .customer import Customer, PROVINCES
from .directory import Directory
from .errors import (
    InvalidPaymentRequest,
    InvalidUsageRequest,
    LedgerError,
    OperationResult,
    ReportIOFailure,
)
from .trade import TradeRecord

__all__ = [
    "Bill",
    "Clock",
    "Customer",
    "DEFAULT_CATALOG",
    "Directory",
    "EnergyKind",
    "InvalidPaymentRequest",
    "InvalidUsageRequest",
    "LedgerError",
    "MaintenanceEntry",
    "ManualClock",
    "OVERDUE_AFTER_DAYS",
    "OperationResult",
    "PROVINCES",
    "PriceCatalog",
    "ReportIOFailure",
    "SystemClock",
    "TradeRecord",
]
