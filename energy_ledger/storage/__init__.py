"""
Storage for Energy Ledger.

The monthly report file is the only thing written to disk.
"""
