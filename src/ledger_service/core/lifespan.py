"""Application lifecycle management."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from ledger_service.config import get_settings
from ledger_service.core.state import init_app_state
from ledger_service.logging import get_logger, setup_logging
from ledger_service.services.account_store import AccountStore
from ledger_service.services.balance_mutator import BalanceMutator
from ledger_service.services.database import Database
from ledger_service.services.ledger_query import LedgerQuery
from ledger_service.services.ledger_store import LedgerStore
from ledger_service.services.provisioning import AccountProvisioning
from ledger_service.services.transfer_coordinator import TransferCoordinator

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    # === STARTUP ===
    settings = get_settings()

    setup_logging(settings.logging.level, settings.service.name, settings.logging.directory)
    logger = get_logger(__name__)

    state = init_app_state()

    # Storage is shared by every component through injection
    database = Database(
        db_path=settings.database.path,
        busy_timeout_ms=settings.database.busy_timeout_ms,
    )
    accounts = AccountStore()
    ledger = LedgerStore()

    state.database = database
    state.provisioning = AccountProvisioning(
        database,
        accounts,
        bcrypt_rounds=settings.accounts.bcrypt_rounds,
        account_number_attempts=settings.accounts.account_number_attempts,
        min_password_length=settings.accounts.min_password_length,
    )
    state.balance_mutator = BalanceMutator(database, accounts, ledger)
    state.transfer_coordinator = TransferCoordinator(database, accounts, ledger)
    state.ledger_query = LedgerQuery(database, accounts, ledger)

    logger.info(
        "Service starting",
        extra={
            "service": settings.service.name,
            "version": settings.service.version,
            "port": settings.server.port,
        },
    )

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Service shutting down", extra={"uptime_seconds": state.uptime_seconds})
    database.close()
