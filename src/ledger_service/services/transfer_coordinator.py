"""Two-account transfers with a matched pair of ledger entries."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from ledger_service.exceptions import (
    balance_limit_exceeded,
    insufficient_funds,
    invalid_counterparty,
)
from ledger_service.logging import get_logger
from ledger_service.services.account_store import BalanceLimitError
from ledger_service.services.ledger_store import TransactionType
from ledger_service.services.money import parse_amount

if TYPE_CHECKING:
    from decimal import Decimal

    from ledger_service.services.account_store import AccountRecord, AccountStore
    from ledger_service.services.database import Database
    from ledger_service.services.ledger_store import LedgerStore, TransactionRecord


class TransferCoordinator:
    """
    Moves funds between two accounts.

    Sender debit, recipient credit, and both ledger entries share one
    atomic unit: either all four writes are visible or none is.
    """

    def __init__(self, database: Database, accounts: AccountStore, ledger: LedgerStore) -> None:
        self._database = database
        self._accounts = accounts
        self._ledger = ledger
        self._logger = get_logger(__name__)

    def transfer(
        self,
        sender_id: str,
        recipient_account_number: str,
        recipient_name: str,
        amount: Decimal,
    ) -> tuple[AccountRecord, TransactionRecord]:
        """
        Transfer ``amount`` from the sender to the account matching both
        ``recipient_account_number`` and ``recipient_name``.

        Returns:
            The sender's updated account and its ``transfer_sent`` record.

        Raises:
            ServiceError: INVALID_AMOUNT, INVALID_COUNTERPARTY,
                INSUFFICIENT_FUNDS, STORAGE_UNAVAILABLE.
        """
        amount = parse_amount(amount)

        with self._database.transaction() as db:
            sender = self._accounts.get(db, sender_id)
            recipient = self._accounts.find_by_number_and_name(
                db,
                recipient_account_number,
                recipient_name,
            )
            if sender is None or recipient is None:
                raise invalid_counterparty()
            if sender.account_id == recipient.account_id:
                raise invalid_counterparty()

            if sender.balance < amount:
                raise insufficient_funds()

            sender_balance = self._accounts.debit(db, sender.account_id, amount)
            if sender_balance is None:
                raise insufficient_funds()
            try:
                recipient_balance = self._accounts.credit(db, recipient.account_id, amount)
            except BalanceLimitError as exc:
                raise balance_limit_exceeded() from exc
            if recipient_balance is None:
                raise invalid_counterparty()

            # Both entries carry the same timestamp.
            sent = self._ledger.append(
                db,
                sender.account_id,
                TransactionType.TRANSFER_SENT,
                amount,
                sender_balance,
                recipient_id=recipient.account_id,
                recipient_name=recipient.name,
            )
            received = self._ledger.append(
                db,
                recipient.account_id,
                TransactionType.TRANSFER_RECEIVED,
                amount,
                recipient_balance,
                sender_id=sender.account_id,
                sender_name=sender.name,
                date=sent.date,
            )

        self._logger.info(
            "Transfer completed",
            extra={
                "sender_id": sender.account_id,
                "recipient_id": recipient.account_id,
                "amount": str(amount),
                "sent_tx_id": sent.tx_id,
                "received_tx_id": received.tx_id,
            },
        )
        return replace(sender, balance=sender_balance), sent
