"""
Report and statistics structures.

Plain data returned by the Directory. Rendering lives elsewhere
(storage.report_file for the report file, cli.main for the console).
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List

from .catalog import EnergyKind
from .money import percentage


@dataclass(frozen=True)
class ProvinceStatistics:
    """Point-in-time aggregates for one province."""
    province: str
    customers: int
    allocated: Decimal
    used: Decimal
    unpaid: Decimal
    overdue: int

    @property
    def usage_percentage(self) -> float:
        return percentage(self.used, self.allocated)

    @property
    def overdue_percentage(self) -> float:
        return percentage(self.overdue, self.customers)


@dataclass(frozen=True)
class TradeSummary:
    """Import/export totals with per-kind breakdowns."""
    total_imports: Decimal = Decimal("0")
    total_exports: Decimal = Decimal("0")
    imports_by_kind: Dict[EnergyKind, Decimal] = field(default_factory=dict)
    exports_by_kind: Dict[EnergyKind, Decimal] = field(default_factory=dict)

    @property
    def net_balance(self) -> Decimal:
        """Imports minus exports."""
        return self.total_imports - self.total_exports


@dataclass(frozen=True)
class MonthlyReport:
    """Everything that goes into the monthly report file."""
    generated_at: datetime
    customers: int
    total_unpaid: Decimal
    overdue: int
    provinces: List[ProvinceStatistics]
    trades: TradeSummary

    @property
    def overdue_percentage(self) -> float:
        return percentage(self.overdue, self.customers)

    @property
    def period(self) -> str:
        """Month and year the report covers, e.g. "October 2026"."""
        return self.generated_at.strftime("%B %Y")


@dataclass(frozen=True)
class SystemStats:
    """Headline numbers for the stats screen."""
    customers: int
    customers_by_province: Dict[str, int]
    rates: Dict[EnergyKind, Decimal]
    overdue_customers: int
    overdue_amount: Decimal
    trades: TradeSummary

    @property
    def overdue_percentage(self) -> float:
        return percentage(self.overdue_customers, self.customers)
