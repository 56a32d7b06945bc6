"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from ledger_service.core.state import get_app_state
from ledger_service.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health and return statistics."""
    state = get_app_state()
    total_accounts = 0
    total_transactions = 0
    if state.ledger_query is not None:
        total_accounts = await run_in_threadpool(state.ledger_query.count_accounts)
        total_transactions = await run_in_threadpool(state.ledger_query.count_transactions)
    return HealthResponse(
        status="ok",
        uptime_seconds=state.uptime_seconds,
        started_at=state.started_at,
        total_accounts=total_accounts,
        total_transactions=total_transactions,
    )
