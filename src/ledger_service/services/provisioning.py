"""Account registration, sign-in, and account-number assignment."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING

import bcrypt

from ledger_service.exceptions import (
    ServiceError,
    account_not_found,
    email_exists,
    invalid_credentials,
)
from ledger_service.logging import get_logger
from ledger_service.services.account_store import (
    DuplicateAccountNumberError,
    DuplicateEmailError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from ledger_service.services.account_store import AccountRecord, AccountStore
    from ledger_service.services.database import Database

ACCOUNT_NUMBER_MIN = 1_000_000_000
ACCOUNT_NUMBER_MAX = 9_999_999_999

# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
BCRYPT_MAX_PASSWORD_BYTES = 72


def generate_account_number() -> int:
    """Random 10-digit account number."""
    return ACCOUNT_NUMBER_MIN + secrets.randbelow(ACCOUNT_NUMBER_MAX - ACCOUNT_NUMBER_MIN + 1)


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively."""
    return email.strip().lower()


class AccountProvisioning:
    """Creates accounts, verifies credentials, and assigns account numbers."""

    def __init__(
        self,
        database: Database,
        accounts: AccountStore,
        bcrypt_rounds: int,
        account_number_attempts: int,
        min_password_length: int,
        number_generator: Callable[[], int] = generate_account_number,
    ) -> None:
        self._database = database
        self._accounts = accounts
        self._bcrypt_rounds = bcrypt_rounds
        self._account_number_attempts = account_number_attempts
        self._min_password_length = min_password_length
        self._number_generator = number_generator
        self._logger = get_logger(__name__)

    def _validate_password(self, password: str) -> None:
        if len(password) < self._min_password_length:
            raise ServiceError(
                "INVALID_PASSWORD",
                f"Password must be at least {self._min_password_length} characters",
                400,
                {},
            )
        if len(password.encode()) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ServiceError(
                "INVALID_PASSWORD",
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
                400,
                {},
            )

    def _hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._bcrypt_rounds)
        return bcrypt.hashpw(password.encode(), salt).decode()

    def register(self, name: str, email: str, password: str) -> AccountRecord:
        """
        Register a new account with a zero balance.

        Raises:
            ServiceError: EMAIL_EXISTS, INVALID_PASSWORD, STORAGE_UNAVAILABLE.
        """
        self._validate_password(password)
        email = normalize_email(email)
        # Hash before opening the atomic unit; bcrypt is deliberately slow.
        password_hash = self._hash_password(password)

        with self._database.transaction() as db:
            if self._accounts.get_by_email(db, email) is not None:
                raise email_exists()
            try:
                account = self._accounts.insert(db, name, email, password_hash)
            except DuplicateEmailError as exc:
                raise email_exists() from exc

        self._logger.info("Account registered", extra={"account_id": account.account_id})
        return account

    def authenticate(self, email: str, password: str) -> AccountRecord:
        """
        Verify credentials and return the account.

        Raises:
            ServiceError: INVALID_CREDENTIALS, STORAGE_UNAVAILABLE.
        """
        with self._database.read() as db:
            account = self._accounts.get_by_email(db, normalize_email(email))
        if account is None:
            raise invalid_credentials()

        password_bytes = password.encode()
        if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
            raise invalid_credentials()
        if not bcrypt.checkpw(password_bytes, account.password_hash.encode()):
            raise invalid_credentials()
        return account

    def assign_account_number(self, account_id: str) -> str:
        """
        Generate, store and return a fresh 10-digit account number.

        Collisions with an existing number are retried up to the
        configured number of attempts.

        Raises:
            ServiceError: ACCOUNT_NOT_FOUND (500), ACCOUNT_NUMBER_EXHAUSTED,
                STORAGE_UNAVAILABLE.
        """
        with self._database.transaction() as db:
            account = self._accounts.get(db, account_id)
            if account is None:
                raise account_not_found(status_code=500)

            for attempt in range(1, self._account_number_attempts + 1):
                candidate = str(self._number_generator())
                try:
                    self._accounts.set_account_number(db, account_id, candidate)
                except DuplicateAccountNumberError:
                    self._logger.warning(
                        "Account number collision, retrying",
                        extra={"account_id": account_id, "attempt": attempt},
                    )
                    continue
                break
            else:
                raise ServiceError(
                    "ACCOUNT_NUMBER_EXHAUSTED",
                    "Error generating account number",
                    500,
                    {"attempts": self._account_number_attempts},
                )

        self._logger.info(
            "Account number assigned",
            extra={"account_id": account_id, "account_number": candidate},
        )
        return candidate
