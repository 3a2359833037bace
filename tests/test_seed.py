"""
Tests for the demo population generator.

Tests determinism for a given seed and the billing/payment pattern.
"""

import random
from decimal import Decimal

from energy_ledger.demo.seed import FIRST_CUSTOMER_ID, SEED_PROVINCES, seed_directory


def _snapshot(directory):
    return [
        (c.customer_id, c.name, c.email, c.address, c.energy_kind, c.allocated, c.used,
         [(b.amount, b.paid) for b in c.bills])
        for c in directory.customers
    ]


class TestSeedDirectory:
    """Test synthetic population generation."""

    def test_population_size_and_ids(self, clock):
        """Verify customers per province and sequential IDs."""
        directory = seed_directory(random.Random(1), clock=clock, customers_per_province=10, trade_count=6)

        assert len(directory) == 10 * len(SEED_PROVINCES)
        ids = [c.customer_id for c in directory.customers]
        assert ids == list(range(FIRST_CUSTOMER_ID, FIRST_CUSTOMER_ID + len(ids)))
        assert {p: len(v) for p, v in directory.province_index.items()} == {p: 10 for p in SEED_PROVINCES}
        assert len(directory.trades) == 6

    def test_same_seed_same_population(self, clock):
        """Verify the injected random source makes runs reproducible."""
        first = seed_directory(random.Random(42), clock=clock, customers_per_province=9)
        second = seed_directory(random.Random(42), clock=clock, customers_per_province=9)
        assert _snapshot(first) == _snapshot(second)

    def test_different_seed_different_population(self, clock):
        """Verify different seeds diverge."""
        first = seed_directory(random.Random(1), clock=clock, customers_per_province=9)
        second = seed_directory(random.Random(2), clock=clock, customers_per_province=9)
        assert _snapshot(first) != _snapshot(second)

    def test_billing_pattern(self, clock):
        """Verify every 3rd customer has history and every 9th is overdue."""
        directory = seed_directory(random.Random(3), clock=clock, customers_per_province=18)
        ontario = [directory.customers[i] for i in directory.province_index["Ontario"]]

        for i, customer in enumerate(ontario):
            if i % 3 == 0:
                assert len(customer.bills) == 1
                assert customer.used == Decimal("0")
                assert customer.bills[0].paid == (i % 9 != 0)
                assert customer.has_overdue() == (i % 9 == 0)
            else:
                assert customer.bills == []
                assert customer.used > 0

        assert len(directory.overdue_customers()) == 2 * len(SEED_PROVINCES)

    def test_customer_fields_are_consistent(self, clock):
        """Verify generated emails, addresses and allocations."""
        directory = seed_directory(random.Random(5), clock=clock, customers_per_province=15)
        for customer in directory.customers:
            first, last = customer.name.split(" ")
            assert customer.email == f"{first[0]}{last}@email.com".lower()
            assert customer.address.endswith(f", {customer.province}")
            assert Decimal("250") <= customer.allocated <= Decimal("1000")
            assert customer.used <= customer.allocated

    def test_maintenance_pattern(self, clock):
        """Verify every 15th customer has an equipment check."""
        directory = seed_directory(random.Random(5), clock=clock, customers_per_province=16)
        quebec = [directory.customers[i] for i in directory.province_index["Quebec"]]
        with_maintenance = [i for i, c in enumerate(quebec) if c.maintenance_log]
        assert with_maintenance == [0, 15]
        entry = quebec[0].maintenance_log[0]
        assert entry.description == "Equipment check"
        assert Decimal("50") <= entry.cost <= Decimal("200")

    def test_trades(self, clock):
        """Verify two in three trades are imports, priced near the catalog rate."""
        directory = seed_directory(random.Random(8), clock=clock, customers_per_province=1, trade_count=30)
        trades = directory.trades
        assert sum(1 for t in trades if t.is_import) == 20
        for trade in trades:
            rate = directory.catalog.get_price(trade.energy_kind)
            assert rate * Decimal("0.69") <= trade.unit_price <= rate * Decimal("1.31")
            assert Decimal("1000") <= trade.quantity <= Decimal("10000")

    def test_billing_run_after_seed(self, clock):
        """Verify seeded usage can be billed straight away."""
        directory = seed_directory(random.Random(4), clock=clock, customers_per_province=6)
        idle_before = sum(1 for c in directory.customers if c.used == 0)
        issued = directory.run_billing_cycle()
        assert len(issued) == len(directory) - idle_before
        assert all(c.used == 0 for c in directory.customers)

