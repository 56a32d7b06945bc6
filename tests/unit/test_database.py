"""Unit tests for the SQLite atomic unit and schema guards."""

from __future__ import annotations

import sqlite3
from decimal import Decimal

import pytest

from ledger_service.exceptions import ServiceError
from ledger_service.services.database import Database
from tests.helpers import open_account


@pytest.mark.unit
def test_transaction_rolls_back_on_exception(bank):
    """Writes made before an exception inside the unit are discarded."""
    account = open_account(bank, "Alice", "alice@example.com", balance=100)

    with pytest.raises(ServiceError), bank.database.transaction() as db:
        bank.accounts.credit(db, account.account_id, Decimal("50"))
        raise ServiceError("BOOM", "boom", 400)

    assert bank.balance(account.account_id) == 100


@pytest.mark.unit
def test_transaction_commits_on_success(bank):
    """Writes are visible after the block exits normally."""
    account = open_account(bank, "Alice", "alice@example.com")

    with bank.database.transaction() as db:
        bank.accounts.set_account_number(db, account.account_id, "1234567890")

    assert bank.account(account.account_id).account_number == "1234567890"


@pytest.mark.unit
def test_transaction_records_cannot_be_updated(bank):
    """The ledger table rejects UPDATE."""
    open_account(bank, "Alice", "alice@example.com", balance=10)

    with pytest.raises(sqlite3.DatabaseError, match="immutable"), bank.database.transaction() as db:
        db.execute("UPDATE transactions SET amount = 1")


@pytest.mark.unit
def test_transaction_records_cannot_be_deleted(bank):
    """The ledger table rejects DELETE."""
    open_account(bank, "Alice", "alice@example.com", balance=10)

    with (
        pytest.raises(sqlite3.DatabaseError, match="append-only"),
        bank.database.transaction() as db,
    ):
        db.execute("DELETE FROM transactions")


@pytest.mark.unit
def test_negative_balance_rejected_by_schema(bank):
    """The accounts table refuses a negative balance even without the service checks."""
    account = open_account(bank, "Alice", "alice@example.com")

    with pytest.raises(sqlite3.IntegrityError), bank.database.transaction() as db:
        db.execute(
            "UPDATE accounts SET balance = -1 WHERE account_id = ?",
            (account.account_id,),
        )


@pytest.mark.unit
def test_locked_database_reports_storage_unavailable(db_path):
    """A writer that cannot get the lock in time fails with STORAGE_UNAVAILABLE."""
    holder = Database(db_path=db_path, busy_timeout_ms=50)
    waiter = Database(db_path=db_path, busy_timeout_ms=50)
    try:
        with holder.transaction():
            with pytest.raises(ServiceError) as exc_info, waiter.transaction():
                pass
        assert exc_info.value.error == "STORAGE_UNAVAILABLE"
        assert exc_info.value.status_code == 500
        assert exc_info.value.details == {"retryable": True}

        # Lock released: the waiter can write again.
        with waiter.transaction() as db:
            db.execute("SELECT 1")
    finally:
        holder.close()
        waiter.close()
