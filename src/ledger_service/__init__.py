"""Ledger Service - accounts, balances and an append-only transaction ledger."""

__version__ = "0.1.0"
