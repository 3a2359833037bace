"""
Command-line interface for Energy Ledger.

Exposes the back-office operations as typer commands.
"""
