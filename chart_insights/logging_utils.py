"""
Structured logging helpers and the injectable diagnostic logger.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

DEFAULT_LOGGER_NAME = "chart_insights"


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


class DiagnosticLogger(Protocol):
    def log(self, event: str, **fields: Any) -> None:
        ...

    def warn(self, event: str, **fields: Any) -> None:
        ...

    def error(self, event: str, **fields: Any) -> None:
        ...


class NullDiagnosticLogger:
    """
    Discards every diagnostic event.
    """

    def log(self, event: str, **fields: Any) -> None:
        return None

    def warn(self, event: str, **fields: Any) -> None:
        return None

    def error(self, event: str, **fields: Any) -> None:
        return None


class StructuredDiagnosticLogger:
    """
    Forwards diagnostic events to a standard library logger as JSON lines.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)

    def log(self, event: str, **fields: Any) -> None:
        log_event(self._logger, logging.DEBUG, event, **fields)

    def warn(self, event: str, **fields: Any) -> None:
        log_event(self._logger, logging.WARNING, event, **fields)

    def error(self, event: str, **fields: Any) -> None:
        log_event(self._logger, logging.ERROR, event, **fields)


NULL_LOGGER: DiagnosticLogger = NullDiagnosticLogger()
