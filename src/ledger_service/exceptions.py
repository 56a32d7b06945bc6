"""Domain exception and the ledger's error taxonomy."""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """
    Business-rule failure with a client-facing error code.

    Raised anywhere in the service layer. Exception handlers in
    ``ledger_service.core.exceptions`` turn it into the standard
    ``{"error", "message", "details"}`` envelope.
    """

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code
        self.details = details if details is not None else {}

    def __repr__(self) -> str:
        return f"ServiceError({self.error!r}, {self.message!r}, {self.status_code})"


def email_exists() -> ServiceError:
    """Conflict: the email is already registered."""
    return ServiceError("EMAIL_EXISTS", "Email already registered", 400, {})


def invalid_credentials() -> ServiceError:
    """Unauthorized: unknown email or wrong password."""
    return ServiceError("INVALID_CREDENTIALS", "Invalid credentials", 401, {})


def account_not_found(status_code: int = 400) -> ServiceError:
    """NotFound: the account id does not resolve."""
    return ServiceError("ACCOUNT_NOT_FOUND", "User not found", status_code, {})


def insufficient_funds() -> ServiceError:
    """InsufficientFunds: the debit exceeds the balance."""
    return ServiceError("INSUFFICIENT_FUNDS", "Insufficient balance", 400, {})


def balance_limit_exceeded() -> ServiceError:
    """Validation: the credit would push a balance past the storable maximum."""
    return ServiceError("INVALID_AMOUNT", "Resulting balance is too large", 400, {})


def invalid_counterparty() -> ServiceError:
    """InvalidCounterparty: sender or recipient could not be resolved."""
    return ServiceError("INVALID_COUNTERPARTY", "Invalid sender or recipient", 400, {})


def storage_unavailable() -> ServiceError:
    """StorageUnavailable: the database is locked or unreachable. Retryable."""
    return ServiceError(
        "STORAGE_UNAVAILABLE",
        "Storage is temporarily unavailable, please retry",
        500,
        {"retryable": True},
    )
