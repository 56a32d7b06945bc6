"""Single-account deposits and withdrawals."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from ledger_service.exceptions import (
    ServiceError,
    account_not_found,
    balance_limit_exceeded,
    insufficient_funds,
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

OPERATION_TYPES: frozenset[TransactionType] = frozenset(
    {TransactionType.DEPOSIT, TransactionType.WITHDRAW}
)


def parse_operation_type(value: object) -> TransactionType:
    """
    Validate a client-supplied operation kind.

    Raises:
        ServiceError: INVALID_TRANSACTION_TYPE unless value is deposit or withdraw.
    """
    if isinstance(value, str):
        for kind in OPERATION_TYPES:
            if kind.value == value:
                return kind
    raise ServiceError(
        "INVALID_TRANSACTION_TYPE",
        "Transaction type must be 'deposit' or 'withdraw'",
        400,
        {},
    )


class BalanceMutator:
    """
    Applies one balance-changing operation to one account.

    The balance update and its ledger entry are written in the same
    atomic unit, so the stored balance always equals the ``balance``
    field of the account's most recent record.
    """

    def __init__(self, database: Database, accounts: AccountStore, ledger: LedgerStore) -> None:
        self._database = database
        self._accounts = accounts
        self._ledger = ledger
        self._logger = get_logger(__name__)

    def apply_operation(
        self,
        account_id: str,
        kind: TransactionType | str,
        amount: Decimal,
    ) -> tuple[AccountRecord, TransactionRecord]:
        """
        Deposit into or withdraw from an account.

        Args:
            account_id: Account to mutate.
            kind: ``deposit`` or ``withdraw``.
            amount: Positive amount with at most two decimal places.

        Returns:
            The updated account and the new transaction record.

        Raises:
            ServiceError: INVALID_TRANSACTION_TYPE, INVALID_AMOUNT,
                ACCOUNT_NOT_FOUND, INSUFFICIENT_FUNDS, STORAGE_UNAVAILABLE.
        """
        operation = parse_operation_type(kind)
        amount = parse_amount(amount)

        with self._database.transaction() as db:
            account = self._accounts.get(db, account_id)
            if account is None:
                raise account_not_found()

            if operation is TransactionType.DEPOSIT:
                try:
                    new_balance = self._accounts.credit(db, account_id, amount)
                except BalanceLimitError as exc:
                    raise balance_limit_exceeded() from exc
            else:
                if amount > account.balance:
                    raise insufficient_funds()
                new_balance = self._accounts.debit(db, account_id, amount)

            if new_balance is None:
                # Guarded debit refused: balance no longer covers the amount.
                raise insufficient_funds()

            record = self._ledger.append(db, account_id, operation, amount, new_balance)

        self._logger.info(
            "Operation applied",
            extra={
                "account_id": account_id,
                "type": operation.value,
                "amount": str(amount),
                "balance": str(new_balance),
                "tx_id": record.tx_id,
            },
        )
        return replace(account, balance=new_balance), record
