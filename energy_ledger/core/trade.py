"""
Import and export trade records.

Defines the entries of the energy trade ledger.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from .catalog import EnergyKind
from .money import to_decimal


@dataclass(frozen=True)
class TradeRecord:
    """Immutable record of one import or export of energy.

    Append-only entries that make up the provider's trade ledger.
    Once created, these records must never be modified.
    """
    energy_kind: EnergyKind
    quantity: Decimal
    unit_price: Decimal
    is_import: bool
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate the energy kind and that quantity and price are positive."""
        if not isinstance(self.energy_kind, EnergyKind):
            object.__setattr__(self, "energy_kind", EnergyKind.parse(self.energy_kind))
        quantity = to_decimal(self.quantity)
        unit_price = to_decimal(self.unit_price)
        if quantity <= 0:
            raise ValueError("quantity must be > 0")
        if unit_price <= 0:
            raise ValueError("unit_price must be > 0")
        object.__setattr__(self, "quantity", quantity)
        object.__setattr__(self, "unit_price", unit_price)

    @property
    def value(self) -> Decimal:
        """Total value of the transaction."""
        return self.quantity * self.unit_price

    @property
    def direction(self) -> str:
        return "import" if self.is_import else "export"
