"""
Customer directory and ledger orchestration.

The Directory owns every customer, the province index, the trade log and the
rate card. It runs billing and reminder cycles and computes statistics.
All aggregates are recomputed from the customers on every call.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from .billing import Bill
from .catalog import DEFAULT_CATALOG, EnergyKind, PriceCatalog
from .clock import Clock, SystemClock
from .customer import Customer
from .notifications import LoggingNotifier, Notifier, Reminder
from .reports import MonthlyReport, ProvinceStatistics, SystemStats, TradeSummary
from .trade import TradeRecord
from energy_ledger.utils.logging import get_logger

logger = get_logger(__name__)


class Directory:
    """In-memory ledger of customers and trades."""

    def __init__(self, catalog: PriceCatalog = DEFAULT_CATALOG, clock: Optional[Clock] = None):
        """Initialize an empty directory.

        Args:
            catalog: Rate card used by billing runs
            clock: Time source for report dates
        """
        self.catalog = catalog
        self.clock = clock or SystemClock()
        self._customers: List[Customer] = []
        self._province_index: Dict[str, List[int]] = {}
        self._ids = set()
        self._trades: List[TradeRecord] = []

    @property
    def customers(self) -> List[Customer]:
        return list(self._customers)

    @property
    def trades(self) -> List[TradeRecord]:
        return list(self._trades)

    @property
    def province_index(self) -> Dict[str, List[int]]:
        """Province to customer positions, provinces in alphabetical order."""
        return {
            province: list(self._province_index[province])
            for province in sorted(self._province_index)
        }

    def __len__(self) -> int:
        return len(self._customers)

    def add_customer(self, customer: Customer) -> None:
        """Append a customer and index it under its province.

        Raises:
            ValueError: If a customer with the same ID already exists
        """
        if customer.customer_id in self._ids:
            raise ValueError(f"Duplicate customer ID: {customer.customer_id}")
        self._ids.add(customer.customer_id)
        self._customers.append(customer)
        self._province_index.setdefault(customer.province, []).append(len(self._customers) - 1)

    def add_trade(self, trade: TradeRecord) -> None:
        self._trades.append(trade)

    def run_billing_cycle(self) -> List[Bill]:
        """Bill every customer with recorded usage at their kind's rate.

        Customers with no usage are skipped, so no empty bills are created.

        Returns:
            Bills issued in this run, in customer order
        """
        issued = []
        for customer in self._customers:
            if customer.used > 0:
                bill = customer.issue_bill(self.catalog.get_price(customer.energy_kind))
                logger.debug(
                    "Billed customer %s: $%.2f", customer.customer_id, bill.amount
                )
                issued.append(bill)

        total = sum((bill.amount for bill in issued), Decimal("0"))
        logger.info(
            "Billing run complete: %d bills issued, $%.2f billed",
            len(issued), total,
            extra={"bills": len(issued)},
        )
        return issued

    def run_reminders(self, notifier: Optional[Notifier] = None) -> List[Reminder]:
        """Compose reminders for overdue customers and hand them to a notifier.

        Customers already reminded since their last payment are skipped.

        Args:
            notifier: Delivery collaborator (defaults to logging only)

        Returns:
            Reminders that were sent
        """
        notifier = notifier or LoggingNotifier()
        sent = []
        for customer in self._customers:
            text = customer.generate_reminder()
            if not text:
                continue
            reminder = Reminder(
                customer_id=customer.customer_id,
                customer_name=customer.name,
                email=customer.email,
                text=text,
            )
            notifier.send(reminder)
            sent.append(reminder)

        logger.info("Reminder run complete: %d sent", len(sent), extra={"reminders": len(sent)})
        return sent

    def find_customers(self, query: str, province: str = "") -> List[Customer]:
        """Search by ID, name or email, optionally within one province.

        Matching is case-sensitive substring containment on any of the three
        fields. An empty query matches everyone.
        """
        results = []
        for customer in self._customers:
            if province and customer.province != province:
                continue
            if (query in str(customer.customer_id)
                    or query in customer.name
                    or query in customer.email):
                results.append(customer)
        return results

    def overdue_customers(self) -> List[Customer]:
        return [c for c in self._customers if c.has_overdue()]

    def province_statistics(self) -> Dict[str, ProvinceStatistics]:
        """Per-province aggregates, provinces in alphabetical order."""
        stats = {}
        for province, positions in self.province_index.items():
            members = [self._customers[i] for i in positions]
            stats[province] = ProvinceStatistics(
                province=province,
                customers=len(members),
                allocated=sum((c.allocated for c in members), Decimal("0")),
                used=sum((c.used for c in members), Decimal("0")),
                unpaid=sum((c.total_owed() for c in members), Decimal("0")),
                overdue=sum(1 for c in members if c.has_overdue()),
            )
        return stats

    def trade_summary(self) -> TradeSummary:
        """Totals of the trade log, broken down by energy kind."""
        imports = Decimal("0")
        exports = Decimal("0")
        imports_by_kind: Dict[EnergyKind, Decimal] = {}
        exports_by_kind: Dict[EnergyKind, Decimal] = {}

        for trade in self._trades:
            if trade.is_import:
                imports += trade.value
                imports_by_kind[trade.energy_kind] = imports_by_kind.get(trade.energy_kind, Decimal("0")) + trade.value
            else:
                exports += trade.value
                exports_by_kind[trade.energy_kind] = exports_by_kind.get(trade.energy_kind, Decimal("0")) + trade.value

        return TradeSummary(
            total_imports=imports,
            total_exports=exports,
            imports_by_kind=_in_kind_order(imports_by_kind),
            exports_by_kind=_in_kind_order(exports_by_kind),
        )

    def monthly_report(self) -> MonthlyReport:
        """Assemble the monthly report as data."""
        return MonthlyReport(
            generated_at=self.clock.now(),
            customers=len(self._customers),
            total_unpaid=sum((c.total_owed() for c in self._customers), Decimal("0")),
            overdue=sum(1 for c in self._customers if c.has_overdue()),
            provinces=list(self.province_statistics().values()),
            trades=self.trade_summary(),
        )

    def system_stats(self) -> SystemStats:
        overdue = self.overdue_customers()
        return SystemStats(
            customers=len(self._customers),
            customers_by_province={
                province: len(positions)
                for province, positions in self.province_index.items()
            },
            rates=dict(self.catalog.prices),
            overdue_customers=len(overdue),
            overdue_amount=sum((c.total_owed() for c in overdue), Decimal("0")),
            trades=self.trade_summary(),
        )


def _in_kind_order(totals: Dict[EnergyKind, Decimal]) -> Dict[EnergyKind, Decimal]:
    return {kind: totals[kind] for kind in EnergyKind if kind in totals}
