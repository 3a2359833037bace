"""
Unit tests for the monthly report file.

Tests field order, number formatting and write failures.
"""

from datetime import timedelta
from decimal import Decimal

from energy_ledger.core.catalog import EnergyKind
from energy_ledger.core.directory import Directory
from energy_ledger.core.errors import ReportIOFailure
from energy_ledger.core.trade import TradeRecord
from energy_ledger.storage.report_file import render_monthly_report, write_monthly_report


def _build_directory(clock, make_customer):
    directory = Directory(clock=clock)

    late = make_customer(province="Ontario", allocated=500)
    late.record_usage(300)
    late.issue_bill(Decimal("0.18"), issued_at=clock.now() - timedelta(days=31))
    late.record_usage(125)
    directory.add_customer(late)

    directory.add_customer(make_customer(province="Alberta", allocated=250))

    directory.add_trade(TradeRecord(EnergyKind.CRUDE_OIL, 1000, Decimal("1.00"), True, clock.now()))
    directory.add_trade(TradeRecord(EnergyKind.SOLAR, 1000, Decimal("0.25"), True, clock.now()))
    directory.add_trade(TradeRecord(EnergyKind.CRUDE_OIL, 500, Decimal("1.00"), False, clock.now()))
    return directory


EXPECTED_REPORT = """\
Energy Provider Monthly Report - October 2026

Overall Stats:
Total Customers: 2
Total Unpaid: $54.00
Overdue Customers: 1 (50.0%)

Province Breakdown:
Alberta:
  Customers: 1
  Energy Allocated: 250.00 units
  Energy Used: 0.00 (0.0%)
  Unpaid Bills: $0.00
  Overdue: 0 (0.0%)

Ontario:
  Customers: 1
  Energy Allocated: 500.00 units
  Energy Used: 125.00 (25.0%)
  Unpaid Bills: $54.00
  Overdue: 1 (100.0%)

Import/Export Summary:
Total Imports: $1250.00
Total Exports: $500.00
Net Balance: $750.00

Imports by Type:
  Crude Oil: $1000.00
  Solar: $250.00

Exports by Type:
  Crude Oil: $500.00

--- End of Report ---
"""


class TestRenderReport:
    """Test report text rendering."""

    def test_full_report_layout(self, clock, make_customer):
        """Verify every section, in order, with the expected rounding."""
        directory = _build_directory(clock, make_customer)
        assert render_monthly_report(directory.monthly_report()) == EXPECTED_REPORT

    def test_empty_report(self, clock):
        """Verify an empty directory renders with 0% rather than failing."""
        text = render_monthly_report(Directory(clock=clock).monthly_report())
        assert "Total Customers: 0" in text
        assert "Overdue Customers: 0 (0.0%)" in text
        assert "Province Breakdown:\nImport/Export Summary:" in text
        assert text.endswith("--- End of Report ---\n")

    def test_negative_net_balance(self, clock):
        """Verify exports larger than imports produce a negative balance."""
        directory = Directory(clock=clock)
        directory.add_trade(TradeRecord(EnergyKind.NUCLEAR, 100, Decimal("0.22"), False, clock.now()))
        text = render_monthly_report(directory.monthly_report())
        assert "Net Balance: $-22.00" in text

    def test_percentages_have_one_decimal(self, clock, make_customer):
        """Verify usage percentages are rounded to one place."""
        directory = Directory(clock=clock)
        customer = make_customer(allocated=300)
        customer.record_usage(100)
        directory.add_customer(customer)
        text = render_monthly_report(directory.monthly_report())
        assert "Energy Used: 100.00 (33.3%)" in text


class TestWriteReport:
    """Test writing the report file."""

    def test_write_success(self, clock, make_customer, tmp_path):
        """Verify the file is written as UTF-8 and its path returned."""
        directory = _build_directory(clock, make_customer)
        path = tmp_path / "monthly_report.txt"

        result = write_monthly_report(directory.monthly_report(), path)

        assert result.ok
        assert result.value == path
        assert path.read_text(encoding="utf-8") == EXPECTED_REPORT

    def test_unwritable_destination(self, clock, tmp_path, caplog):
        """Verify a bad destination is reported, not raised."""
        path = tmp_path / "missing_dir" / "report.txt"

        with caplog.at_level("ERROR"):
            result = write_monthly_report(Directory(clock=clock).monthly_report(), path)

        assert not result.ok
        assert isinstance(result.error, ReportIOFailure)
        assert result.error.path == str(path)
        assert "Couldn't open report file" in result.message
        assert "Couldn't write report file" in caplog.text
        assert not path.exists()
