"""Read-only views over the ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ledger_service.services.account_store import AccountStore
    from ledger_service.services.database import Database
    from ledger_service.services.ledger_store import LedgerStore, TransactionRecord


class LedgerQuery:
    """Transaction history and service statistics. Never writes."""

    def __init__(self, database: Database, accounts: AccountStore, ledger: LedgerStore) -> None:
        self._database = database
        self._accounts = accounts
        self._ledger = ledger

    def list_transactions(self, account_id: str) -> list[TransactionRecord]:
        """
        All transaction records owned by the account, most recent first.

        Unknown accounts have no records and yield an empty list.

        Raises:
            ServiceError: STORAGE_UNAVAILABLE.
        """
        with self._database.read() as db:
            return self._ledger.list_for_account(db, account_id)

    def count_accounts(self) -> int:
        """Count total accounts."""
        with self._database.read() as db:
            return self._accounts.count(db)

    def count_transactions(self) -> int:
        """Count total transaction records."""
        with self._database.read() as db:
            return self._ledger.count(db)
