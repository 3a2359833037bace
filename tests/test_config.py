"""
Unit tests for configuration loading and validation.

Tests strict validation and error handling for ledger configs.
"""

import os
import tempfile
from decimal import Decimal

import pytest
import yaml

from energy_ledger.config.loader import (
    LedgerConfig,
    LoggingConfig,
    ReportConfig,
    SeedConfig,
    default_config,
    load_ledger_config,
)
from energy_ledger.core.catalog import EnergyKind


class TestConfigLoading:
    """Test configuration loading and validation."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        """Clean up test environment."""
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write_config(self, config_data: dict, filename: str = "config.yaml") -> str:
        """Write configuration data to temporary file."""
        config_path = os.path.join(self.temp_dir, filename)
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f)
        return config_path

    def test_valid_config_loads_correctly(self):
        """Test that a full configuration loads correctly."""
        config_data = {
            "rates": {
                "solar": 0.2,
                "Natural Gas": "0.90",
            },
            "seed": {
                "customers_per_province": 20,
                "trades": 5,
                "random_seed": 42,
            },
            "report": {"path": "out/report.txt"},
            "logging": {"level": "debug", "json": True},
        }

        config = load_ledger_config(self._write_config(config_data))

        assert config.rates == {
            EnergyKind.SOLAR: Decimal("0.2"),
            EnergyKind.NATURAL_GAS: Decimal("0.90"),
        }
        assert config.seed == SeedConfig(customers_per_province=20, trades=5, random_seed=42)
        assert config.report.path == "out/report.txt"
        assert config.logging == LoggingConfig(level="DEBUG", json=True)

    def test_rates_override_catalog(self):
        """Test that configured rates replace only the named defaults."""
        config = load_ledger_config(self._write_config({"rates": {"crude_oil": 1.5}}))
        catalog = config.catalog()
        assert catalog.get_price(EnergyKind.CRUDE_OIL) == Decimal("1.5")
        assert catalog.get_price(EnergyKind.SOLAR) == Decimal("0.18")

    def test_partial_config_uses_defaults(self):
        """Test that omitted sections fall back to defaults."""
        config = load_ledger_config(self._write_config({"report": {"path": "r.txt"}}))
        assert config.seed == SeedConfig()
        assert config.logging == LoggingConfig()
        assert config.rates == {}

    def test_default_config(self):
        """Test the built-in defaults."""
        config = default_config()
        assert config == LedgerConfig()
        assert config.seed.customers_per_province == 100
        assert config.seed.trades == 30
        assert config.report == ReportConfig(path="monthly_report.txt")
        assert config.catalog().get_price(EnergyKind.NUCLEAR) == Decimal("0.22")

    def test_missing_file_raises_error(self):
        """Test that missing config file raises error."""
        with pytest.raises(FileNotFoundError, match="Ledger config file not found"):
            load_ledger_config("nonexistent.yaml")

    def test_empty_config_raises_error(self):
        """Test that empty config file raises error."""
        config_path = self._write_config({})

        with pytest.raises(ValueError, match="Configuration file is empty"):
            load_ledger_config(config_path)

    def test_invalid_yaml_raises_error(self):
        """Test that invalid YAML raises error."""
        config_path = os.path.join(self.temp_dir, "invalid.yaml")
        with open(config_path, 'w') as f:
            f.write("invalid: yaml: content: [")

        with pytest.raises(yaml.YAMLError):
            load_ledger_config(config_path)

    def test_unknown_top_level_key_raises_error(self):
        """Test that typos in section names are caught."""
        with pytest.raises(ValueError, match="Unknown configuration keys"):
            load_ledger_config(self._write_config({"ratez": {"solar": 1}}))

    def test_unknown_section_key_raises_error(self):
        """Test that unknown keys inside a section are caught."""
        with pytest.raises(ValueError, match="Unknown seed keys"):
            load_ledger_config(self._write_config({"seed": {"customers": 5}}))

    def test_section_must_be_mapping(self):
        """Test that sections must be dictionaries."""
        with pytest.raises(ValueError, match="'report' must be a dictionary"):
            load_ledger_config(self._write_config({"report": "r.txt"}))

    def test_unknown_energy_kind_raises_error(self):
        """Test that rates for unknown kinds are rejected."""
        with pytest.raises(ValueError, match="Unsupported energy kind: coal"):
            load_ledger_config(self._write_config({"rates": {"coal": 0.5}}))

    @pytest.mark.parametrize("value", [0, -1, "free", True])
    def test_invalid_rate_raises_error(self, value):
        """Test that rates must be positive numbers."""
        with pytest.raises(ValueError, match="Rate for 'solar'"):
            load_ledger_config(self._write_config({"rates": {"solar": value}}))

    def test_non_positive_population_raises_error(self):
        """Test that the demo population cannot be empty."""
        with pytest.raises(ValueError, match="customers_per_province must be > 0"):
            load_ledger_config(self._write_config({"seed": {"customers_per_province": 0}}))

    def test_non_integer_seed_raises_error(self):
        """Test that the random seed must be an integer."""
        with pytest.raises(ValueError, match="random_seed"):
            load_ledger_config(self._write_config({"seed": {"random_seed": "abc"}}))

    def test_invalid_log_level_raises_error(self):
        """Test that log levels are checked."""
        with pytest.raises(ValueError, match="logging.level must be one of"):
            load_ledger_config(self._write_config({"logging": {"level": "LOUD"}}))

    def test_json_flag_must_be_boolean(self):
        """Test that logging.json must be a boolean."""
        with pytest.raises(ValueError, match="'logging.json' must be true or false"):
            load_ledger_config(self._write_config({"logging": {"json": "yes"}}))

    def test_empty_report_path_raises_error(self):
        """Test that the report path cannot be blank."""
        with pytest.raises(ValueError, match="'report.path' must be a non-empty string"):
            load_ledger_config(self._write_config({"report": {"path": " "}}))
