"""
Structured JSON logging for the ledger service.

Every module logs through ``get_logger(__name__)``; records end up as one
JSON object per line on stdout and in ``<directory>/<YYYY-MM-DD>.log``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

SERVICE_LOGGER_NAME = "ledger_service"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime"}


def _utc_day(created: float) -> date:
    return datetime.fromtimestamp(created, tz=UTC).date()


class JSONFormatter(logging.Formatter):
    """Renders a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(
                timespec="seconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class DailyFileHandler(logging.FileHandler):
    """
    Appends to one file per UTC day.

    The file is picked from each record's creation time, so a record
    logged after midnight opens the next day's file.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self.day = _utc_day(datetime.now(tz=UTC).timestamp())
        super().__init__(self._path(self.day), encoding="utf-8", delay=True)

    def _path(self, day: date) -> Path:
        return self.directory / f"{day.isoformat()}.log"

    def emit(self, record: logging.LogRecord) -> None:
        day = _utc_day(record.created)
        if day != self.day:
            # handle() already holds the handler lock
            if self.stream is not None:
                self.stream.close()
                self.stream = None  # type: ignore[assignment]
            self.day = day
            self.baseFilename = str(self._path(day).absolute())
        super().emit(record)


def setup_logging(level: str, service_name: str, log_directory: str) -> logging.Logger:
    """
    Install the stdout and daily-file JSON handlers on the service logger.

    Calling it again replaces the previous handlers. The level has
    already been validated by ``LoggingConfig``.
    """
    logger = logging.getLogger(SERVICE_LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    Path(log_directory).mkdir(parents=True, exist_ok=True)
    formatter = JSONFormatter()
    for handler in (logging.StreamHandler(sys.stdout), DailyFileHandler(log_directory)):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    logger.propagate = False
    logger.debug("Logging configured", extra={"service": service_name})
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger, placed under the ``ledger_service`` namespace."""
    if name.split(".", 1)[0] == SERVICE_LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{SERVICE_LOGGER_NAME}.{name}")
