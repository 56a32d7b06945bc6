"""SQLite connection, schema, and the scoped atomic unit."""

from __future__ import annotations

import contextlib
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import TYPE_CHECKING

from ledger_service.exceptions import storage_unavailable
from ledger_service.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

_SCHEMA = """
CREATE TABLE IF NOT EXISTS accounts (
    account_id      TEXT PRIMARY KEY,
    name            TEXT NOT NULL,
    email           TEXT NOT NULL UNIQUE,
    password_hash   TEXT NOT NULL,
    account_number  TEXT UNIQUE,
    balance         INTEGER NOT NULL DEFAULT 0
                        CHECK (balance >= 0 AND balance <= 100000000000000000),
    created_at      TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS transactions (
    seq             INTEGER PRIMARY KEY AUTOINCREMENT,
    tx_id           TEXT NOT NULL UNIQUE,
    account_id      TEXT NOT NULL REFERENCES accounts(account_id),
    type            TEXT NOT NULL CHECK (
                        type IN ('deposit', 'withdraw', 'transfer_sent', 'transfer_received')
                    ),
    amount          INTEGER NOT NULL CHECK (amount > 0),
    balance         INTEGER NOT NULL CHECK (balance >= 0),
    recipient_id    TEXT REFERENCES accounts(account_id),
    recipient_name  TEXT,
    sender_id       TEXT REFERENCES accounts(account_id),
    sender_name     TEXT,
    date            TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_accounts_number_name
    ON accounts (account_number, name);

CREATE INDEX IF NOT EXISTS ix_transactions_account_date
    ON transactions (account_id, date, seq);

CREATE TRIGGER IF NOT EXISTS tr_transactions_no_update
    BEFORE UPDATE ON transactions
BEGIN
    SELECT RAISE(ABORT, 'transaction records are immutable');
END;

CREATE TRIGGER IF NOT EXISTS tr_transactions_no_delete
    BEFORE DELETE ON transactions
BEGIN
    SELECT RAISE(ABORT, 'transaction records are append-only');
END;
"""

# sqlite3 reports lock timeouts with these messages.
_BUSY_MARKERS: tuple[str, ...] = ("database is locked", "database is busy")


def _is_storage_outage(exc: sqlite3.OperationalError) -> bool:
    message = str(exc).lower()
    return any(marker in message for marker in _BUSY_MARKERS)


class Database:
    """
    Owns the SQLite connection shared by the account and ledger stores.

    All writes go through ``transaction()``, which opens a
    ``BEGIN IMMEDIATE`` unit: SQLite hands out its write lock up front,
    so two writers on the same file (in this process or another) can
    never interleave their read-modify-write sequences.
    """

    def __init__(self, db_path: str, busy_timeout_ms: int) -> None:
        self._lock = RLock()
        self._logger = get_logger(__name__)
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        # Autocommit mode: transactions are opened explicitly.
        self._db = sqlite3.connect(
            db_path,
            check_same_thread=False,
            isolation_level=None,
            timeout=busy_timeout_ms / 1000,
        )
        self._db.row_factory = sqlite3.Row
        self._db.execute("PRAGMA journal_mode=WAL")
        self._db.execute("PRAGMA foreign_keys=ON")
        self._db.execute(f"PRAGMA busy_timeout={int(busy_timeout_ms)}")
        self._init_schema()

    def _init_schema(self) -> None:
        """Create tables, indexes and triggers if they don't exist."""
        with self._lock:
            self._db.executescript(_SCHEMA)

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Scoped atomic unit.

        Commits when the block exits normally. Rolls back on any
        exception, including ``ServiceError`` raised for business-rule
        failures, then re-raises. Lock timeouts surface as
        STORAGE_UNAVAILABLE.
        """
        with self._lock:
            try:
                self._db.execute("BEGIN IMMEDIATE")
            except sqlite3.OperationalError as exc:
                if _is_storage_outage(exc):
                    self._logger.warning("Could not open atomic unit", extra={"reason": str(exc)})
                    raise storage_unavailable() from exc
                raise

            try:
                yield self._db
                self._db.execute("COMMIT")
            except sqlite3.OperationalError as exc:
                self._rollback()
                if _is_storage_outage(exc):
                    self._logger.warning("Atomic unit aborted", extra={"reason": str(exc)})
                    raise storage_unavailable() from exc
                raise
            except BaseException:
                self._rollback()
                raise

    @contextmanager
    def read(self) -> Iterator[sqlite3.Connection]:
        """Serialized read access outside an atomic unit."""
        with self._lock:
            try:
                yield self._db
            except sqlite3.OperationalError as exc:
                if _is_storage_outage(exc):
                    raise storage_unavailable() from exc
                raise

    def _rollback(self) -> None:
        if self._db.in_transaction:
            with contextlib.suppress(sqlite3.Error):
                self._db.execute("ROLLBACK")

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            self._db.close()


__all__ = ["Database"]
