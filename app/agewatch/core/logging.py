"""Logging configuration for agewatch.

Uses Python's standard logging module with a JSON formatter so that
every record, including the per-entry event stream, is written as one
structured object per line:

    {"ModTime": "...", "filename": "/queue/a.txt", "level": "info",
     "mode": "-rw-r--r--", "msg": "", "time": "..."}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import IO, Any

from agewatch.events.models import Severity, severity_for_level

# Package root logger; module loggers are its children
logger = logging.getLogger("agewatch")

_RESERVED_KEYS = frozenset({"time", "level", "msg"})

_handler: logging.Handler | None = None


class JsonFormatter(logging.Formatter):
    """Formatter rendering records as single-line JSON objects.

    Structured context is read from the record's ``fields`` attribute
    (passed as ``extra={"fields": {...}}``). Field names clashing with
    the reserved keys are prefixed with ``fields.``.
    """

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {}
        fields: object = getattr(record, "fields", None)
        if isinstance(fields, dict):
            for key, value in fields.items():
                name = f"fields.{key}" if key in _RESERVED_KEYS else str(key)
                data[name] = value

        data["time"] = datetime.fromtimestamp(record.created, tz=UTC).isoformat()
        data["level"] = severity_for_level(record.levelno).value
        data["msg"] = record.getMessage()
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, sort_keys=True, default=str)


def setup_logging(level: Severity = Severity.INFO, stream: IO[str] | None = None) -> logging.Logger:
    """Configure the agewatch logger.

    Installs a single stream handler with the JSON formatter. Calling it
    again replaces the previously installed handler, so the CLI can be
    invoked repeatedly in one process (tests).

    Args:
        level: Minimum severity written to the log.
        stream: Output stream. Defaults to the current ``sys.stderr``.

    Returns:
        The configured package logger.
    """
    global _handler
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.setLevel(level.level)
    logger.propagate = False
    _handler = handler
    return logger
