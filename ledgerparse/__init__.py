"""
ledgerparse – Plaintext Ledger Journal Parser

A Python library and command-line tool that turns ledger-CLI journal text
into typed records: account declarations, transactions, postings, amounts
and notes.
"""

__version__ = "0.1.0"
__author__ = "Conrad"
