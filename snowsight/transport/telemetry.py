"""
Call logging for the request executor.

Two channels:
- operator (`snowsight.transport`): every request, with headers and bodies.
- console (`snowsight.console`): only failures a user can act on (401/403, exceptions).
"""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from typing import Optional

OPERATOR_LOGGER_NAME = "snowsight.transport"
CONSOLE_LOGGER_NAME = "snowsight.console"

AUTH_FAILURE_STATUSES = (401, 403)


def operator_logger() -> logging.Logger:
    return logging.getLogger(OPERATOR_LOGGER_NAME)


def console_logger() -> logging.Logger:
    return logging.getLogger(CONSOLE_LOGGER_NAME)


class CallTimer:
    """Wall-clock timer for one call; logs the duration on exit, whatever the outcome."""

    def __init__(self, logger: logging.Logger, method: str, url: str) -> None:
        self._logger = logger
        self._method = method
        self._url = url
        self._started: Optional[float] = None
        self.elapsed_ms: int = 0

    def __enter__(self) -> "CallTimer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, *exc_info) -> None:
        elapsed = time.perf_counter() - (self._started or time.perf_counter())
        self.elapsed_ms = int(elapsed * 1000)
        self._logger.info(
            "%s %s took %s (%d ms)", self._method, self._url, timedelta(seconds=elapsed), self.elapsed_ms
        )
