"""
Energy Ledger.

Back-office ledger for an energy provider: customer allocations, billing
cycles, overdue reminders, trade records and monthly reporting.
"""

__version__ = "0.1.0"
