"""
Utilities for Energy Ledger.

Logging setup shared by the CLI and the core.
"""
