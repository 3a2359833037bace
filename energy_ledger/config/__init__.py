"""
Configuration for Energy Ledger.

Loads rates, demo seeding, report and logging settings from YAML.
"""
