"""API routers."""

from ledger_service.routers import accounts, health, transactions

__all__ = ["accounts", "health", "transactions"]
