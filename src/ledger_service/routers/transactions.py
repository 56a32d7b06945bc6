"""Balance operation, transfer, and history endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool

from ledger_service.core.state import get_app_state
from ledger_service.routers.helpers import (
    account_response,
    parse_request,
    transaction_response,
)
from ledger_service.schemas import (
    ErrorResponse,
    OperationRequest,
    OperationResponse,
    TransactionResponse,
    TransferRequest,
    TransferResponse,
)

router = APIRouter(responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})


# === POST /api/transaction: Deposit / Withdraw ===


@router.post("/api/transaction", response_model=OperationResponse)
async def apply_operation(request: Request) -> OperationResponse:
    """Deposit into or withdraw from an account."""
    body = await request.body()
    data = parse_request(body, OperationRequest)

    state = get_app_state()
    if state.balance_mutator is None:
        msg = "Balance mutator not initialized"
        raise RuntimeError(msg)

    account, record = await run_in_threadpool(
        state.balance_mutator.apply_operation,
        data.user_id,
        data.type,
        data.amount,
    )
    return OperationResponse(
        user=account_response(account),
        transaction=transaction_response(record),
    )


# === POST /api/transfer: Transfer Between Accounts ===


@router.post("/api/transfer", response_model=TransferResponse)
async def transfer(request: Request) -> TransferResponse:
    """Transfer funds to the account matching number and name."""
    body = await request.body()
    data = parse_request(body, TransferRequest)

    state = get_app_state()
    if state.transfer_coordinator is None:
        msg = "Transfer coordinator not initialized"
        raise RuntimeError(msg)

    sender, sent = await run_in_threadpool(
        state.transfer_coordinator.transfer,
        data.sender_id,
        data.recipient_account_number,
        data.recipient_name,
        data.amount,
    )
    return TransferResponse(
        sender=account_response(sender),
        sender_transaction=transaction_response(sent),
    )


# === GET /api/transactions/{user_id}: History ===


@router.get("/api/transactions/{user_id}", response_model=list[TransactionResponse])
async def list_transactions(user_id: str) -> list[TransactionResponse]:
    """Transaction history of an account, most recent first."""
    state = get_app_state()
    if state.ledger_query is None:
        msg = "Ledger query not initialized"
        raise RuntimeError(msg)

    records = await run_in_threadpool(state.ledger_query.list_transactions, user_id)
    return [transaction_response(record) for record in records]
