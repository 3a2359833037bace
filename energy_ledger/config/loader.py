"""
Configuration management and loading.

Reads the ledger's YAML settings: rate overrides, demo population,
report destination and logging.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from energy_ledger.core.catalog import DEFAULT_CATALOG, EnergyKind, PriceCatalog
from energy_ledger.storage.report_file import DEFAULT_REPORT_PATH
from energy_ledger.utils.logging import LEVELS


@dataclass(frozen=True)
class SeedConfig:
    """Size and randomness of the demo population."""
    customers_per_province: int = 100
    trades: int = 30
    random_seed: Optional[int] = None

    def __post_init__(self):
        """Validate population sizes."""
        if self.customers_per_province <= 0:
            raise ValueError("customers_per_province must be > 0")
        if self.trades < 0:
            raise ValueError("trades cannot be negative")


@dataclass(frozen=True)
class ReportConfig:
    """Where the monthly report is written."""
    path: str = DEFAULT_REPORT_PATH


@dataclass(frozen=True)
class LoggingConfig:
    """Log level and format."""
    level: str = "INFO"
    json: bool = False

    def __post_init__(self):
        if self.level.upper() not in LEVELS:
            raise ValueError(f"logging.level must be one of: {list(LEVELS)}")


@dataclass(frozen=True)
class LedgerConfig:
    """Complete ledger configuration."""
    rates: Dict[EnergyKind, Decimal] = field(default_factory=dict)
    seed: SeedConfig = field(default_factory=SeedConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def catalog(self) -> PriceCatalog:
        """Default rate card with any configured overrides applied."""
        return DEFAULT_CATALOG.with_overrides(self.rates)


def default_config() -> LedgerConfig:
    return LedgerConfig()


def load_ledger_config(path: str) -> LedgerConfig:
    """Load and validate ledger configuration from a YAML file.

    Every section is optional, but unknown keys and bad values are errors
    so that a typo never silently falls back to a default rate.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated LedgerConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Ledger config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping")

    allowed_top_keys = {'rates', 'seed', 'report', 'logging'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    return LedgerConfig(
        rates=_parse_rates(raw_config.get('rates') or {}),
        seed=_parse_seed(_section(raw_config, 'seed', {'customers_per_province', 'trades', 'random_seed'})),
        report=_parse_report(_section(raw_config, 'report', {'path'})),
        logging=_parse_logging(_section(raw_config, 'logging', {'level', 'json'})),
    )


def _section(raw_config: Dict[str, Any], name: str, allowed_keys: set) -> Dict[str, Any]:
    data = raw_config.get(name)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be a dictionary")
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown {name} keys: {unknown_keys}")
    return data


def _parse_rates(data: Any) -> Dict[EnergyKind, Decimal]:
    """Parse per-kind price overrides.

    Raises:
        ValueError: If a kind is unknown or a price is not a positive number
    """
    if not isinstance(data, dict):
        raise ValueError("'rates' must be a dictionary")

    rates = {}
    for name, value in data.items():
        kind = EnergyKind.parse(name)
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"Rate for '{name}' must be a number")
        try:
            price = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Rate for '{name}' must be a number")
        if not price.is_finite() or price <= 0:
            raise ValueError(f"Rate for '{name}' must be > 0")
        rates[kind] = price
    return rates


def _parse_seed(data: Dict[str, Any]) -> SeedConfig:
    values = {}
    for key in ('customers_per_province', 'trades'):
        if key in data:
            if isinstance(data[key], bool) or not isinstance(data[key], int):
                raise ValueError(f"'seed.{key}' must be an integer")
            values[key] = data[key]
    if data.get('random_seed') is not None:
        if isinstance(data['random_seed'], bool) or not isinstance(data['random_seed'], int):
            raise ValueError("'seed.random_seed' must be an integer or null")
        values['random_seed'] = data['random_seed']
    return SeedConfig(**values)


def _parse_report(data: Dict[str, Any]) -> ReportConfig:
    if 'path' not in data:
        return ReportConfig()
    if not isinstance(data['path'], str) or not data['path'].strip():
        raise ValueError("'report.path' must be a non-empty string")
    return ReportConfig(path=data['path'])


def _parse_logging(data: Dict[str, Any]) -> LoggingConfig:
    level = data.get('level', "INFO")
    if not isinstance(level, str):
        raise ValueError("'logging.level' must be a string")
    json_logs = data.get('json', False)
    if not isinstance(json_logs, bool):
        raise ValueError("'logging.json' must be true or false")
    return LoggingConfig(level=level.upper(), json=json_logs)
