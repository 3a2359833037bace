"""
Synthetic demo population.

Builds a Directory full of plausible customers and trades. All randomness
comes from the Random instance passed in, so the same seed always produces
the same population.
"""

import random
from datetime import timedelta
from decimal import Decimal
from typing import Optional

from energy_ledger.core.catalog import DEFAULT_CATALOG, EnergyKind, PriceCatalog
from energy_ledger.core.clock import Clock, SystemClock
from energy_ledger.core.customer import Customer
from energy_ledger.core.directory import Directory
from energy_ledger.core.trade import TradeRecord
from energy_ledger.utils.logging import get_logger

logger = get_logger(__name__)

SEED_PROVINCES = ("Ontario", "Quebec", "Alberta", "British Columbia", "Manitoba")
FIRST_NAMES = ("John", "Jane", "Mike", "Emily", "Dave")
LAST_NAMES = ("Smith", "Johnson", "Williams", "Jones", "Brown")
STREETS = ("Howard Ave", "Dougall Ave", "Walker Rd", "Ouellette Ave", "Lauzon Rd")

FIRST_CUSTOMER_ID = 1001
# Old enough that unpaid history bills are overdue as soon as they are seeded
HISTORY_BILL_AGE_DAYS = 45


def _uniform(rng: random.Random, low: float, high: float) -> Decimal:
    return Decimal(str(round(rng.uniform(low, high), 2)))


def seed_directory(
    rng: random.Random,
    clock: Optional[Clock] = None,
    catalog: PriceCatalog = DEFAULT_CATALOG,
    customers_per_province: int = 100,
    trade_count: int = 30,
) -> Directory:
    """Create a directory with a synthetic population.

    Pattern per province, by position i within the province:
    - every customer has some usage recorded this period
    - every 3rd (i % 3 == 0) has a bill issued 45 days ago for that usage
    - of those, every 9th (i % 9 == 0) is left unpaid and so is overdue
    - every 15th has an "Equipment check" maintenance entry

    Args:
        rng: Source of randomness
        clock: Clock shared by every customer
        catalog: Rate card for bills and trade prices
        customers_per_province: Customers created in each seed province
        trade_count: Trade records created; two in three are imports

    Returns:
        Populated Directory
    """
    clock = clock or SystemClock()
    directory = Directory(catalog=catalog, clock=clock)
    kinds = list(EnergyKind)
    customer_id = FIRST_CUSTOMER_ID

    for province in SEED_PROVINCES:
        for i in range(customers_per_province):
            first = rng.choice(FIRST_NAMES)
            last = rng.choice(LAST_NAMES)
            street = rng.choice(STREETS)
            kind = rng.choice(kinds)
            allocated = _uniform(rng, 250, 1000)

            customer = Customer(
                customer_id=customer_id,
                name=f"{first} {last}",
                province=province,
                email=f"{first[0]}{last}@email.com".lower(),
                address=f"{rng.randint(100, 9999)} {street}, {province}",
                energy_kind=kind,
                allocated=allocated,
                clock=clock,
            )
            customer_id += 1

            customer.record_usage(_uniform(rng, 50, float(allocated) * 0.8))

            if i % 3 == 0:
                customer.issue_bill(
                    catalog.get_price(kind),
                    issued_at=clock.now() - timedelta(days=HISTORY_BILL_AGE_DAYS),
                )
                if i % 9 != 0:
                    customer.pay(0, customer.total_owed())

            if i % 15 == 0:
                customer.add_maintenance("Equipment check", _uniform(rng, 50, 200))

            directory.add_customer(customer)

    for i in range(trade_count):
        kind = rng.choice(kinds)
        rate = float(catalog.get_price(kind))
        directory.add_trade(TradeRecord(
            energy_kind=kind,
            quantity=_uniform(rng, 1000, 10000),
            unit_price=Decimal(str(round(rng.uniform(rate * 0.7, rate * 1.3), 4))),
            is_import=i % 3 != 0,
            timestamp=clock.now(),
        ))

    logger.info(
        "Seeded %d customers in %d provinces and %d trades",
        len(directory), len(SEED_PROVINCES), trade_count,
    )
    return directory
