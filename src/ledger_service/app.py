"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ledger_service.config import get_settings
from ledger_service.core.exceptions import register_exception_handlers
from ledger_service.core.lifespan import lifespan
from ledger_service.core.middleware import RequestValidationMiddleware
from ledger_service.routers import accounts, health, transactions


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.service.name} Service",
        version=settings.service.version,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Operations"])
    app.include_router(accounts.router, tags=["Accounts"])
    app.include_router(transactions.router, tags=["Transactions"])

    app.add_middleware(
        RequestValidationMiddleware,
        max_body_size=settings.request.max_body_size,
    )
    # Added last so it wraps everything, including 413/415 rejections
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors.allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app
