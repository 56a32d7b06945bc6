"""Account provisioning endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool

from ledger_service.core.state import get_app_state
from ledger_service.logging import get_logger
from ledger_service.routers.helpers import account_response, parse_request
from ledger_service.schemas import (
    AccountNumberResponse,
    AccountResponse,
    ErrorResponse,
    GenerateAccountRequest,
    MessageResponse,
    SigninRequest,
    SignupRequest,
)

router = APIRouter(responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})


# === POST /api/signup: Register ===


@router.post("/api/signup", status_code=201, response_model=MessageResponse)
async def signup(request: Request) -> MessageResponse:
    """Register a new account."""
    body = await request.body()
    data = parse_request(body, SignupRequest)

    state = get_app_state()
    if state.provisioning is None:
        msg = "Provisioning not initialized"
        raise RuntimeError(msg)

    await run_in_threadpool(state.provisioning.register, data.name, data.email, data.password)
    return MessageResponse(message="User created successfully")


# === POST /api/signin: Authenticate ===


@router.post("/api/signin", response_model=AccountResponse)
async def signin(request: Request) -> AccountResponse:
    """
    Verify credentials and return the account without its credential.

    No session or token is issued; callers needing one must put an
    auth layer in front of this service.
    """
    body = await request.body()
    data = parse_request(body, SigninRequest)

    state = get_app_state()
    if state.provisioning is None:
        msg = "Provisioning not initialized"
        raise RuntimeError(msg)

    account = await run_in_threadpool(state.provisioning.authenticate, data.email, data.password)
    get_logger(__name__).info("Account signed in", extra={"account_id": account.account_id})
    return account_response(account)


# === POST /api/generate-account: Assign Account Number ===


@router.post("/api/generate-account", response_model=AccountNumberResponse)
async def generate_account(request: Request) -> AccountNumberResponse:
    """Assign a fresh 10-digit account number."""
    body = await request.body()
    data = parse_request(body, GenerateAccountRequest)

    state = get_app_state()
    if state.provisioning is None:
        msg = "Provisioning not initialized"
        raise RuntimeError(msg)

    account_number = await run_in_threadpool(
        state.provisioning.assign_account_number,
        data.user_id,
    )
    return AccountNumberResponse(account_number=account_number)
