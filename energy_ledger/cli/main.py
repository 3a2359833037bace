"""
CLI interface for Energy Ledger.

Each command maps to one back-office operation; `menu` offers the same
operations as a numbered interactive loop. There is no database: every
invocation works on a freshly seeded demo population.
"""

import random
import sys
from dataclasses import dataclass
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.table import Table

from energy_ledger.config.loader import LedgerConfig, default_config, load_ledger_config
from energy_ledger.core.customer import Customer
from energy_ledger.core.directory import Directory
from energy_ledger.core.reports import SystemStats
from energy_ledger.demo.seed import seed_directory
from energy_ledger.storage.report_file import write_monthly_report
from energy_ledger.utils.logging import configure_logging

app = typer.Typer()
console = Console()

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

MENU = """
[bold]===== Energy Provider System =====[/bold]
1. Find customers
2. Show overdue customers
3. Send payment reminders
4. Run billing process
5. View system stats
6. Generate monthly report
0. Exit"""


@dataclass
class LedgerSession:
    """State shared by the commands of one invocation."""
    config: LedgerConfig
    directory: Directory


def build_session(
    config: LedgerConfig,
    seed: Optional[int] = None,
    per_province: Optional[int] = None,
) -> LedgerSession:
    """Seed a directory according to config, with CLI overrides."""
    random_seed = seed if seed is not None else config.seed.random_seed
    directory = seed_directory(
        random.Random(random_seed),
        catalog=config.catalog(),
        customers_per_province=per_province or config.seed.customers_per_province,
        trade_count=config.seed.trades,
    )
    return LedgerSession(config=config, directory=directory)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML configuration file"
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Random seed for the demo population"
    ),
    per_province: Optional[int] = typer.Option(
        None,
        "--per-province",
        min=1,
        help="Demo customers per province"
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override the configured log level"
    ),
):
    """Energy Ledger CLI."""
    try:
        config = load_ledger_config(config_path) if config_path else default_config()
        configure_logging(
            level=log_level or config.logging.level,
            json_logs=config.logging.json,
        )
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error loading configuration:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    if ctx.invoked_subcommand is None:
        console.print("Energy Ledger - Use --help to see available commands")
        return

    ctx.obj = build_session(config, seed=seed, per_province=per_province)


@app.command()
def find(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Text to look for in ID, name or email"),
    province: str = typer.Option("", "--province", "-p", help="Only search this province"),
    details: bool = typer.Option(False, "--details", "-d", help="Show bill and maintenance history"),
):
    """Find customers by ID, name or email."""
    session: LedgerSession = ctx.obj
    results = session.directory.find_customers(query, province)
    console.print(f"\nFound {len(results)} customers:")
    _display_customers(results, details)


@app.command()
def overdue(
    ctx: typer.Context,
    details: bool = typer.Option(False, "--details", "-d", help="Show bill and maintenance history"),
):
    """List customers with overdue bills."""
    session: LedgerSession = ctx.obj
    results = session.directory.overdue_customers()
    console.print(f"\nFound {len(results)} customers with overdue bills:")
    _display_customers(results, details)


@app.command()
def remind(ctx: typer.Context):
    """Send payment reminders to overdue customers."""
    session: LedgerSession = ctx.obj
    _send_reminders(session.directory)


@app.command()
def bill(ctx: typer.Context):
    """Bill every customer with usage this period."""
    session: LedgerSession = ctx.obj
    _run_billing(session.directory)


@app.command()
def stats(ctx: typer.Context):
    """Show system statistics."""
    session: LedgerSession = ctx.obj
    _display_stats(session.directory.system_stats())


@app.command()
def report(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Report file path (defaults to the configured path)"
    ),
):
    """Generate the monthly report file."""
    session: LedgerSession = ctx.obj
    path = output or session.config.report.path
    if not _generate_report(session.directory, path):
        sys.exit(EXIT_CODE_FAIL)
    sys.exit(EXIT_CODE_PASS)


@app.command()
def menu(ctx: typer.Context):
    """Interactive numbered menu over all operations."""
    session: LedgerSession = ctx.obj
    directory = session.directory

    while True:
        console.print(MENU)
        choice = typer.prompt("Your choice").strip()
        console.print()

        if choice == "1":
            query = typer.prompt("Search (name, ID, or email)", default="", show_default=False)
            province = typer.prompt("Filter by province (optional)", default="", show_default=False)
            results = directory.find_customers(query, province.strip())
            console.print(f"\nFound {len(results)} customers:")
            _display_customers(results, details=True)
        elif choice == "2":
            results = directory.overdue_customers()
            console.print(f"Found {len(results)} customers with overdue bills:")
            _display_customers(results, details=True)
        elif choice == "3":
            _send_reminders(directory)
        elif choice == "4":
            _run_billing(directory)
        elif choice == "5":
            _display_stats(directory.system_stats())
        elif choice == "6":
            _generate_report(directory, session.config.report.path)
        elif choice == "0":
            console.print("Thanks for using the Energy Provider System!")
            break
        else:
            console.print("Oops! Invalid option. Try again.")


def _format_currency(amount) -> str:
    return f"${amount:,.2f}"


def _send_reminders(directory: Directory) -> None:
    sent = directory.run_reminders()
    for reminder in sent:
        console.print(f"Sent reminder to {reminder.customer_name} (ID: {reminder.customer_id})")
    console.print(f"Payment reminders have been sent! ({len(sent)} total)")


def _run_billing(directory: Directory) -> None:
    bills = directory.run_billing_cycle()
    total = sum(b.amount for b in bills)
    console.print(
        f"Billing completed for all customers. "
        f"{len(bills)} bills issued, {_format_currency(total)} billed."
    )


def _generate_report(directory: Directory, path: str) -> bool:
    result = write_monthly_report(directory.monthly_report(), path)
    if not result.ok:
        console.print(f"[red]Error:[/] {result.message}")
        return False
    console.print(f"[green]✓[/] Report saved to {result.value}")
    return True


def _display_customers(customers: List[Customer], details: bool = False) -> None:
    """Display customers as a table, optionally followed by their history."""
    if not customers:
        return

    table = Table()
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Province")
    table.add_column("Energy")
    table.add_column("Owed", justify="right")
    table.add_column("Overdue")
    for c in customers:
        table.add_row(
            str(c.customer_id),
            c.name,
            c.province,
            c.energy_kind.label,
            _format_currency(c.total_owed()),
            "[red]yes[/]" if c.has_overdue() else "no",
        )
    console.print(table)

    if details:
        for c in customers:
            _display_customer_details(c)


def _display_customer_details(customer: Customer) -> None:
    console.print(f"\n[bold]--- Customer {customer.customer_id} ---[/bold]")
    console.print(f"Email: {customer.email}")
    console.print(f"Address: {customer.address}")
    console.print(
        f"Allocation: {customer.allocated} units, used {customer.used}, "
        f"remaining {customer.remaining}"
    )

    if customer.bills:
        console.print("Payment History:")
        for i, b in enumerate(customer.bills, start=1):
            line = (
                f"  Bill #{i} ({b.format_date()}): {_format_currency(b.amount)} - "
                f"{'Paid' if b.paid else 'Unpaid'} - {b.days_since()} days ago"
            )
            if b.is_overdue():
                line += " [red](OVERDUE!)[/]"
            console.print(line)
    else:
        console.print("No bills yet.")

    if customer.maintenance_log:
        console.print("Maintenance Records:")
        for entry in customer.maintenance_log:
            console.print(
                f"  {entry.timestamp:%Y-%m-%d}: {entry.description} - "
                f"Cost: {_format_currency(entry.cost)}"
            )


def _display_stats(stats: SystemStats) -> None:
    """Display system statistics in sections."""
    console.print("\n[bold]+++ Energy Provider System Stats +++[/bold]")
    console.print(f"Total Customers: {stats.customers}")

    console.print("\nBy Province:")
    for province, count in stats.customers_by_province.items():
        console.print(f"  {province}: {count} customers")

    console.print("\nEnergy Rates:")
    for kind, rate in stats.rates.items():
        console.print(f"  {kind.label}: {_format_currency(rate)} per unit")

    console.print("\nOverdue Payments:")
    console.print(
        f"  Customers with overdue bills: {stats.overdue_customers} "
        f"({stats.overdue_percentage:.1f}%)"
    )
    console.print(f"  Total overdue amount: {_format_currency(stats.overdue_amount)}")

    trades = stats.trades
    console.print("\nImport/Export:")
    console.print(f"  Total imports: {_format_currency(trades.total_imports)}")
    console.print(f"  Total exports: {_format_currency(trades.total_exports)}")
    console.print(f"  Balance: {_format_currency(trades.net_balance)}")


if __name__ == "__main__":
    app()
