"""Router test fixtures: app with lifespan and async client."""

import os

import pytest
from httpx import ASGITransport, AsyncClient

from ledger_service.app import create_app
from ledger_service.config import clear_settings_cache
from ledger_service.core.lifespan import lifespan
from ledger_service.core.state import reset_app_state
from tests.helpers import write_config


@pytest.fixture
def max_body_size():
    """Request size limit for the test app. Override to exercise 413."""
    return 1048576


@pytest.fixture
def busy_timeout_ms():
    """How long the app waits on a locked database. Override to exercise lock timeouts."""
    return 5000


@pytest.fixture
async def app(tmp_path, max_body_size, busy_timeout_ms):
    """Create a test app with a temporary database."""
    config_path = write_config(
        tmp_path,
        str(tmp_path / "test.db"),
        max_body_size=max_body_size,
        busy_timeout_ms=busy_timeout_ms,
    )
    os.environ["CONFIG_PATH"] = str(config_path)

    clear_settings_cache()
    reset_app_state()

    test_app = create_app()
    async with lifespan(test_app):
        yield test_app

    reset_app_state()
    clear_settings_cache()
    os.environ.pop("CONFIG_PATH", None)


@pytest.fixture
async def client(app):
    """Create an async HTTP client for the test app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
