"""Shared router helper functions."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from ledger_service.exceptions import ServiceError
from ledger_service.schemas import AccountResponse, TransactionResponse

if TYPE_CHECKING:
    from ledger_service.services.account_store import AccountRecord
    from ledger_service.services.ledger_store import TransactionRecord

RequestModel = TypeVar("RequestModel", bound=BaseModel)


def parse_json_body(body: bytes) -> dict[str, Any]:
    """Parse JSON body, raising ServiceError on failure."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ServiceError(
            "INVALID_JSON",
            "Request body is not valid JSON",
            400,
            {},
        ) from exc

    if not isinstance(data, dict):
        raise ServiceError(
            "INVALID_JSON",
            "Request body must be a JSON object",
            400,
            {},
        )

    return data


def parse_request(body: bytes, model: type[RequestModel]) -> RequestModel:
    """Parse and validate a JSON body into a request model."""
    data = parse_json_body(body)
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        fields = [".".join(str(part) for part in error["loc"]) for error in exc.errors()]
        raise ServiceError(
            "VALIDATION_ERROR",
            "Request validation failed",
            400,
            {"fields": fields},
        ) from exc


def account_response(account: AccountRecord) -> AccountResponse:
    """Client view of an account, without the credential."""
    return AccountResponse(
        id=account.account_id,
        name=account.name,
        email=account.email,
        account_number=account.account_number,
        balance=float(account.balance),
    )


def transaction_response(record: TransactionRecord) -> TransactionResponse:
    """Client view of a ledger entry."""
    return TransactionResponse(
        id=record.tx_id,
        user_id=record.account_id,
        type=record.type.value,
        amount=float(record.amount),
        balance=float(record.balance),
        recipient_id=record.recipient_id,
        recipient_name=record.recipient_name,
        sender_id=record.sender_id,
        sender_name=record.sender_name,
        date=record.date,
    )
