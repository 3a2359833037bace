"""
Shared fixtures for Energy Ledger tests.

Provides a controllable clock and a factory for customers bound to it.
"""

import logging
from datetime import datetime

import pytest

from energy_ledger.core.catalog import EnergyKind
from energy_ledger.core.clock import ManualClock
from energy_ledger.core.customer import Customer


@pytest.fixture
def clock():
    """Clock fixed at a known instant; advance it to age bills."""
    return ManualClock(datetime(2026, 10, 1, 9, 0, 0))


@pytest.fixture
def make_customer(clock):
    """Build customers with sensible defaults, overridable per test."""
    counter = {"next_id": 1001}

    def _make(**overrides):
        fields = {
            "customer_id": counter["next_id"],
            "name": "John Smith",
            "province": "Ontario",
            "email": "jsmith@email.com",
            "address": "120 Howard Ave, Ontario",
            "energy_kind": EnergyKind.SOLAR,
            "allocated": 500,
            "clock": clock,
        }
        fields.update(overrides)
        counter["next_id"] = max(counter["next_id"], fields["customer_id"]) + 1
        return Customer(**fields)

    return _make


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() calls made by CLI and logging tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
