"""Unit test fixtures."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from ledger_service.config import clear_settings_cache
from ledger_service.core.state import reset_app_state
from ledger_service.logging import SERVICE_LOGGER_NAME
from tests.helpers import build_bank

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from tests.helpers import Bank


@pytest.fixture(autouse=True)
def _clear_caches() -> Iterator[None]:
    """Clear settings cache and app state between tests."""
    clear_settings_cache()
    reset_app_state()
    yield
    clear_settings_cache()
    reset_app_state()


@pytest.fixture(autouse=True)
def _reset_service_logger() -> Iterator[None]:
    """Drop handlers installed by setup_logging so they don't outlive the test."""
    yield
    logger = logging.getLogger(SERVICE_LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """Path of a fresh SQLite file for the test."""
    return str(tmp_path / "ledger.db")


@pytest.fixture
def bank(db_path: str) -> Iterator[Bank]:
    """Service layer wired to a fresh database."""
    wired = build_bank(db_path)
    try:
        yield wired
    finally:
        wired.close()
