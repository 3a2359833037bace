"""
Demo data for Energy Ledger.

Seeds a reproducible population of customers and trades.
"""
