"""Entry point for the ledger service.

Usage::

    CONFIG_PATH=config.yaml python -m ledger_service
"""

from __future__ import annotations

import uvicorn

from ledger_service.app import create_app
from ledger_service.config import get_settings


def main() -> None:
    """Run the service with uvicorn using the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        create_app(),
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.server.log_level,
    )


if __name__ == "__main__":
    main()
