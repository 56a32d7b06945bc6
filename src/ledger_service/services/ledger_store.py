"""Append-only transaction records."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from ledger_service.services.money import from_minor_units, to_minor_units

if TYPE_CHECKING:
    import sqlite3
    from decimal import Decimal


class TransactionType(StrEnum):
    """Kinds of balance-affecting operation."""

    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TRANSFER_SENT = "transfer_sent"
    TRANSFER_RECEIVED = "transfer_received"


@dataclass(frozen=True)
class TransactionRecord:
    """
    One ledger entry.

    ``balance`` is the owning account's balance after the operation.
    Counterparty fields are set on transfer entries only.
    """

    tx_id: str
    account_id: str
    type: TransactionType
    amount: Decimal
    balance: Decimal
    date: str
    recipient_id: str | None = None
    recipient_name: str | None = None
    sender_id: str | None = None
    sender_name: str | None = None


_COLUMNS = (
    "tx_id, account_id, type, amount, balance, date, "
    "recipient_id, recipient_name, sender_id, sender_name"
)


class LedgerStore:
    """
    Reads and appends rows of the ``transactions`` table.

    There is no update or delete path; the schema triggers reject both.
    """

    def _row_to_record(self, row: sqlite3.Row) -> TransactionRecord:
        """Convert a database row to a TransactionRecord."""
        return TransactionRecord(
            tx_id=str(row["tx_id"]),
            account_id=str(row["account_id"]),
            type=TransactionType(row["type"]),
            amount=from_minor_units(int(row["amount"])),
            balance=from_minor_units(int(row["balance"])),
            date=str(row["date"]),
            recipient_id=row["recipient_id"],
            recipient_name=row["recipient_name"],
            sender_id=row["sender_id"],
            sender_name=row["sender_name"],
        )

    def append(
        self,
        db: sqlite3.Connection,
        account_id: str,
        tx_type: TransactionType,
        amount: Decimal,
        balance: Decimal,
        *,
        recipient_id: str | None = None,
        recipient_name: str | None = None,
        sender_id: str | None = None,
        sender_name: str | None = None,
        date: str | None = None,
    ) -> TransactionRecord:
        """
        Write one record. Must run inside the same atomic unit as the
        balance change it describes.
        """
        if date is None:
            date = datetime.now(UTC).isoformat(timespec="microseconds")
        record = TransactionRecord(
            tx_id=f"tx-{uuid.uuid4()}",
            account_id=account_id,
            type=tx_type,
            amount=amount,
            balance=balance,
            date=date,
            recipient_id=recipient_id,
            recipient_name=recipient_name,
            sender_id=sender_id,
            sender_name=sender_name,
        )
        db.execute(
            f"INSERT INTO transactions ({_COLUMNS}) "  # noqa: S608
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                record.tx_id,
                record.account_id,
                record.type.value,
                to_minor_units(record.amount),
                to_minor_units(record.balance),
                record.date,
                record.recipient_id,
                record.recipient_name,
                record.sender_id,
                record.sender_name,
            ),
        )
        return record

    def list_for_account(self, db: sqlite3.Connection, account_id: str) -> list[TransactionRecord]:
        """All records owned by the account, most recent first."""
        cursor = db.execute(
            f"SELECT {_COLUMNS} FROM transactions "  # noqa: S608
            "WHERE account_id = ? ORDER BY date DESC, seq DESC",
            (account_id,),
        )
        return [self._row_to_record(row) for row in cursor.fetchall()]

    def latest_for_account(
        self,
        db: sqlite3.Connection,
        account_id: str,
    ) -> TransactionRecord | None:
        """The most recently written record of the account, if any."""
        row = db.execute(
            f"SELECT {_COLUMNS} FROM transactions "  # noqa: S608
            "WHERE account_id = ? ORDER BY seq DESC LIMIT 1",
            (account_id,),
        ).fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    def count(self, db: sqlite3.Connection) -> int:
        """Count total transaction records."""
        row = db.execute("SELECT COUNT(*) FROM transactions").fetchone()
        if row is None:
            return 0
        return int(row[0])
