"""
Monthly report file.

Renders a MonthlyReport as plain text and writes it to disk. This flat file
is the only thing Energy Ledger persists.
"""

from pathlib import Path
from typing import Union

from energy_ledger.core.errors import OperationResult, ReportIOFailure
from energy_ledger.core.reports import MonthlyReport
from energy_ledger.utils.logging import get_logger

logger = get_logger(__name__)

SYSTEM_NAME = "Energy Provider"
DEFAULT_REPORT_PATH = "monthly_report.txt"


def render_monthly_report(report: MonthlyReport) -> str:
    """Render the report text.

    Currency is printed with 2 decimals and percentages with 1.

    Args:
        report: Report data from Directory.monthly_report()

    Returns:
        Report text, newline-terminated
    """
    lines = [
        f"{SYSTEM_NAME} Monthly Report - {report.period}",
        "",
        "Overall Stats:",
        f"Total Customers: {report.customers}",
        f"Total Unpaid: ${report.total_unpaid:.2f}",
        f"Overdue Customers: {report.overdue} ({report.overdue_percentage:.1f}%)",
        "",
        "Province Breakdown:",
    ]

    for province in report.provinces:
        lines.extend([
            f"{province.province}:",
            f"  Customers: {province.customers}",
            f"  Energy Allocated: {province.allocated:.2f} units",
            f"  Energy Used: {province.used:.2f} ({province.usage_percentage:.1f}%)",
            f"  Unpaid Bills: ${province.unpaid:.2f}",
            f"  Overdue: {province.overdue} ({province.overdue_percentage:.1f}%)",
            "",
        ])

    trades = report.trades
    lines.extend([
        "Import/Export Summary:",
        f"Total Imports: ${trades.total_imports:.2f}",
        f"Total Exports: ${trades.total_exports:.2f}",
        f"Net Balance: ${trades.net_balance:.2f}",
        "",
        "Imports by Type:",
    ])
    for kind, value in trades.imports_by_kind.items():
        lines.append(f"  {kind.label}: ${value:.2f}")

    lines.extend(["", "Exports by Type:"])
    for kind, value in trades.exports_by_kind.items():
        lines.append(f"  {kind.label}: ${value:.2f}")

    lines.extend(["", "--- End of Report ---"])
    return "\n".join(lines) + "\n"


def write_monthly_report(
    report: MonthlyReport,
    path: Union[str, Path] = DEFAULT_REPORT_PATH,
) -> OperationResult:
    """Write the rendered report to a UTF-8 text file.

    A single attempt is made. Failure to write is returned, not raised.

    Args:
        report: Report data to render
        path: Destination file

    Returns:
        Successful result with the written Path, or a failed result carrying
        ReportIOFailure
    """
    destination = Path(path)
    text = render_monthly_report(report)
    try:
        destination.write_text(text, encoding="utf-8")
    except OSError as e:
        logger.error("Couldn't write report file %s: %s", destination, e)
        return OperationResult.failure(ReportIOFailure(
            f"Couldn't open report file: {destination} ({e.strerror or e})",
            path=str(destination),
        ))

    logger.info("Report saved to %s", destination)
    return OperationResult.success(destination)
