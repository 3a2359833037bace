"""
Energy kinds and per-unit pricing.

Holds the fixed rate card used when a billing cycle converts usage into charges.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping

from .money import to_decimal


class EnergyKind(Enum):
    """Energy products the provider sells and trades."""
    CRUDE_OIL = "crude_oil"
    SOLAR = "solar"
    NUCLEAR = "nuclear"
    NATURAL_GAS = "natural_gas"

    @property
    def label(self) -> str:
        """Human-readable name used in reports."""
        return _LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "EnergyKind":
        """Parse a config or CLI value ("solar", "Natural Gas", "NATURAL_GAS").

        Raises:
            ValueError: If the value names no known kind
        """
        normalized = str(value).strip().lower().replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unsupported energy kind: {value}") from None


_LABELS = {
    EnergyKind.CRUDE_OIL: "Crude Oil",
    EnergyKind.SOLAR: "Solar",
    EnergyKind.NUCLEAR: "Nuclear",
    EnergyKind.NATURAL_GAS: "Natural Gas",
}


@dataclass(frozen=True)
class PriceCatalog:
    """Immutable rate card: energy kind to price per unit."""
    prices: Mapping[EnergyKind, Decimal]

    def __post_init__(self):
        """Freeze the mapping and validate every price is positive."""
        frozen: Dict[EnergyKind, Decimal] = {}
        for kind, price in self.prices.items():
            if not isinstance(kind, EnergyKind):
                kind = EnergyKind.parse(kind)
            amount = to_decimal(price)
            if amount <= 0:
                raise ValueError(f"Price for {kind.label} must be > 0")
            frozen[kind] = amount
        object.__setattr__(self, "prices", MappingProxyType(frozen))

    def get_price(self, kind: EnergyKind) -> Decimal:
        """Get the per-unit price for an energy kind.

        Args:
            kind: Energy kind to price

        Returns:
            Price per unit

        Raises:
            ValueError: If the kind has no price in this catalog
        """
        if kind not in self.prices:
            raise ValueError(f"Unsupported energy kind: {kind}")
        return self.prices[kind]

    def __getitem__(self, kind: EnergyKind) -> Decimal:
        return self.get_price(kind)

    def with_overrides(self, overrides: Mapping[EnergyKind, Decimal]) -> "PriceCatalog":
        """Return a new catalog with some prices replaced."""
        merged = dict(self.prices)
        merged.update(overrides)
        return PriceCatalog(merged)


# Per unit: kWh, barrel, etc. depending on the product
DEFAULT_CATALOG = PriceCatalog({
    EnergyKind.CRUDE_OIL: Decimal("1.25"),
    EnergyKind.SOLAR: Decimal("0.18"),
    EnergyKind.NUCLEAR: Decimal("0.22"),
    EnergyKind.NATURAL_GAS: Decimal("0.85"),
})
