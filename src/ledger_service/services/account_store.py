"""Persisted account records."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ledger_service.services.money import MAX_BALANCE, from_minor_units, to_minor_units

if TYPE_CHECKING:
    from decimal import Decimal


class DuplicateEmailError(Exception):
    """Raised when an account with the same email already exists."""


class DuplicateAccountNumberError(Exception):
    """Raised when a generated account number is already taken."""


class BalanceLimitError(Exception):
    """Raised when a credit would push a balance past MAX_BALANCE."""


@dataclass(frozen=True)
class AccountRecord:
    """A single account row. ``password_hash`` never leaves the service layer."""

    account_id: str
    name: str
    email: str
    password_hash: str
    account_number: str | None
    balance: Decimal
    created_at: str


_COLUMNS = "account_id, name, email, password_hash, account_number, balance, created_at"


class AccountStore:
    """
    Reads and writes the ``accounts`` table.

    Every method takes the connection handed out by
    ``Database.transaction()`` or ``Database.read()``, so the caller
    decides the atomicity boundary.
    """

    def _row_to_record(self, row: sqlite3.Row) -> AccountRecord:
        """Convert a database row to an AccountRecord."""
        return AccountRecord(
            account_id=str(row["account_id"]),
            name=str(row["name"]),
            email=str(row["email"]),
            password_hash=str(row["password_hash"]),
            account_number=(
                str(row["account_number"]) if row["account_number"] is not None else None
            ),
            balance=from_minor_units(int(row["balance"])),
            created_at=str(row["created_at"]),
        )

    def insert(
        self,
        db: sqlite3.Connection,
        name: str,
        email: str,
        password_hash: str,
    ) -> AccountRecord:
        """
        Insert a new account with a zero balance and no account number.

        Raises:
            DuplicateEmailError: If the email is already registered.
        """
        account_id = f"acct-{uuid.uuid4()}"
        created_at = datetime.now(UTC).isoformat(timespec="microseconds")
        try:
            db.execute(
                "INSERT INTO accounts "
                "(account_id, name, email, password_hash, balance, created_at) "
                "VALUES (?, ?, ?, ?, 0, ?)",
                (account_id, name, email, password_hash, created_at),
            )
        except sqlite3.IntegrityError as exc:
            if "accounts.email" in str(exc):
                raise DuplicateEmailError(email) from exc
            raise

        return AccountRecord(
            account_id=account_id,
            name=name,
            email=email,
            password_hash=password_hash,
            account_number=None,
            balance=from_minor_units(0),
            created_at=created_at,
        )

    def get(self, db: sqlite3.Connection, account_id: str) -> AccountRecord | None:
        """Look up an account by id. Returns None if not found."""
        row = db.execute(
            f"SELECT {_COLUMNS} FROM accounts WHERE account_id = ?",  # noqa: S608
            (account_id,),
        ).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def get_by_email(self, db: sqlite3.Connection, email: str) -> AccountRecord | None:
        """Look up an account by email. Returns None if not found."""
        row = db.execute(
            f"SELECT {_COLUMNS} FROM accounts WHERE email = ?",  # noqa: S608
            (email,),
        ).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def find_by_number_and_name(
        self,
        db: sqlite3.Connection,
        account_number: str,
        name: str,
    ) -> AccountRecord | None:
        """Resolve an account only when both the number and the name match."""
        row = db.execute(
            f"SELECT {_COLUMNS} FROM accounts WHERE account_number = ? AND name = ?",  # noqa: S608
            (account_number, name),
        ).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def set_account_number(
        self,
        db: sqlite3.Connection,
        account_id: str,
        account_number: str,
    ) -> bool:
        """
        Store an account number. Returns False if the account does not exist.

        Raises:
            DuplicateAccountNumberError: If another account holds the number.
        """
        try:
            cursor = db.execute(
                "UPDATE accounts SET account_number = ? WHERE account_id = ?",
                (account_number, account_id),
            )
        except sqlite3.IntegrityError as exc:
            if "accounts.account_number" in str(exc):
                raise DuplicateAccountNumberError(account_number) from exc
            raise
        return cursor.rowcount == 1

    def credit(self, db: sqlite3.Connection, account_id: str, amount: Decimal) -> Decimal | None:
        """
        Add funds. Returns the new balance, or None if the account is missing.

        Must run inside an atomic unit.

        Raises:
            BalanceLimitError: If the new balance would exceed MAX_BALANCE.
        """
        minor = to_minor_units(amount)
        cursor = db.execute(
            "UPDATE accounts SET balance = balance + ? WHERE account_id = ? AND balance <= ?",
            (minor, account_id, to_minor_units(MAX_BALANCE) - minor),
        )
        if cursor.rowcount == 0:
            if self.get(db, account_id) is not None:
                raise BalanceLimitError(account_id)
            return None
        return self._balance(db, account_id)

    def debit(self, db: sqlite3.Connection, account_id: str, amount: Decimal) -> Decimal | None:
        """
        Remove funds only if the balance covers them.

        Returns the new balance, or None if the account is missing or the
        balance is too low. Must run inside an atomic unit.
        """
        minor = to_minor_units(amount)
        cursor = db.execute(
            "UPDATE accounts SET balance = balance - ? WHERE account_id = ? AND balance >= ?",
            (minor, account_id, minor),
        )
        if cursor.rowcount == 0:
            return None
        return self._balance(db, account_id)

    def _balance(self, db: sqlite3.Connection, account_id: str) -> Decimal:
        row = db.execute(
            "SELECT balance FROM accounts WHERE account_id = ?",
            (account_id,),
        ).fetchone()
        if row is None:
            msg = "Account not found after update"
            raise RuntimeError(msg)
        return from_minor_units(int(row["balance"]))

    def count(self, db: sqlite3.Connection) -> int:
        """Count total accounts."""
        row = db.execute("SELECT COUNT(*) FROM accounts").fetchone()
        if row is None:
            return 0
        return int(row[0])
