"""Architecture test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
from pytestarch import EvaluableArchitecture, LayeredArchitecture, get_evaluable_architecture

# Resolve paths relative to this file:
#   tests/architecture/conftest.py -> tests/ -> repository root
_TESTS_DIR = Path(__file__).resolve().parent.parent
_REPO_ROOT = _TESTS_DIR.parent
_LEDGER_PKG = _REPO_ROOT / "src" / "ledger_service"


@pytest.fixture(scope="session")
def evaluable() -> EvaluableArchitecture:
    """Build the evaluable architecture graph for ledger_service.

    Uses the ledger_service package as both root and module path
    so module names are clean (e.g. 'ledger_service.routers.accounts').
    """
    return get_evaluable_architecture(str(_LEDGER_PKG), str(_LEDGER_PKG))


@pytest.fixture(scope="session")
def layered_arch() -> LayeredArchitecture:
    """Define the service's layered architecture.

    Layers (top to bottom):
        routers   - HTTP endpoint handlers (thin wrappers)
        core      - App state, lifespan, middleware, exceptions
        services  - Ledger logic and storage (no FastAPI imports)
    """
    return (
        LayeredArchitecture()
        .layer("routers")
        .containing_modules(["ledger_service.routers"])
        .layer("core")
        .containing_modules(["ledger_service.core"])
        .layer("services")
        .containing_modules(["ledger_service.services"])
    )
