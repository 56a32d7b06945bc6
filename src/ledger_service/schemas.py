"""
Pydantic request/response models for the API.

Field names are snake_case in Python; the wire format keeps the
camelCase names (and ``_id``) that existing clients send and expect.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

# === Requests ===


class _Request(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class SignupRequest(_Request):
    """Body of POST /api/signup."""

    name: StrictStr = Field(min_length=1)
    email: StrictStr = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    password: StrictStr = Field(min_length=1)


class SigninRequest(_Request):
    """Body of POST /api/signin."""

    email: StrictStr = Field(min_length=1)
    password: StrictStr = Field(min_length=1)


class GenerateAccountRequest(_Request):
    """Body of POST /api/generate-account."""

    user_id: StrictStr = Field(alias="userId", min_length=1)


class OperationRequest(_Request):
    """Body of POST /api/transaction."""

    user_id: StrictStr = Field(alias="userId", min_length=1)
    # Checked against the operation kinds by the service layer
    type: StrictStr
    amount: Any


class TransferRequest(_Request):
    """Body of POST /api/transfer."""

    sender_id: StrictStr = Field(alias="senderId", min_length=1)
    recipient_account_number: StrictStr = Field(alias="recipientAccountNumber", min_length=1)
    recipient_name: StrictStr = Field(alias="recipientName", min_length=1)
    amount: Any

    @field_validator("recipient_account_number", mode="before")
    @classmethod
    def _number_as_string(cls, value: Any) -> Any:
        # Clients may send the account number as a JSON number.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


# === Responses ===


class HealthResponse(BaseModel):
    """Response model for GET /health."""

    model_config = ConfigDict(extra="forbid")
    status: Literal["ok"]
    uptime_seconds: float
    started_at: str
    total_accounts: int
    total_transactions: int


class ErrorResponse(BaseModel):
    """Standard error response model."""

    model_config = ConfigDict(extra="forbid")
    error: str
    message: str
    details: dict[str, Any]


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    model_config = ConfigDict(extra="forbid")
    message: str


class AccountResponse(BaseModel):
    """An account as seen by clients. Never carries the credential."""

    model_config = ConfigDict(extra="forbid")
    id: str = Field(serialization_alias="_id")
    name: str
    email: str
    account_number: str | None = Field(serialization_alias="accountNumber")
    balance: float


class TransactionResponse(BaseModel):
    """A ledger entry as seen by clients."""

    model_config = ConfigDict(extra="forbid")
    id: str = Field(serialization_alias="_id")
    user_id: str = Field(serialization_alias="userId")
    type: Literal["deposit", "withdraw", "transfer_sent", "transfer_received"]
    amount: float
    balance: float
    recipient_id: str | None = Field(serialization_alias="recipientId")
    recipient_name: str | None = Field(serialization_alias="recipientName")
    sender_id: str | None = Field(serialization_alias="senderId")
    sender_name: str | None = Field(serialization_alias="senderName")
    date: str


class AccountNumberResponse(BaseModel):
    """Response model for POST /api/generate-account."""

    model_config = ConfigDict(extra="forbid")
    account_number: str = Field(serialization_alias="accountNumber")


class OperationResponse(BaseModel):
    """Response model for POST /api/transaction."""

    model_config = ConfigDict(extra="forbid")
    user: AccountResponse
    transaction: TransactionResponse


class TransferResponse(BaseModel):
    """Response model for POST /api/transfer."""

    model_config = ConfigDict(extra="forbid")
    sender: AccountResponse
    sender_transaction: TransactionResponse = Field(serialization_alias="senderTransaction")
