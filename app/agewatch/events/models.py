"""Event models for the leveled event stream.

Defines the ordered severity levels shared by the logging sink and
the notification gate, and the immutable event record passed to both.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Levels with no stdlib equivalent
TRACE = 5
PANIC = 60

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(PANIC, "PANIC")


class InvalidSeverityError(ValueError):
    """Raised when a severity name cannot be parsed."""


class Severity(str, Enum):
    """Event severity, ordered from least to most severe.

    Attributes:
        TRACE: Very fine-grained diagnostics.
        DEBUG: Diagnostics.
        INFO: Baseline record emitted for every walked entry.
        WARN: Recoverable problems.
        ERROR: Stale entries and per-root walk failures.
        FATAL: Errors that terminate the process.
        PANIC: Highest level, accepted for compatibility.
    """

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"
    PANIC = "panic"

    @property
    def level(self) -> int:
        """Numeric stdlib logging level for this severity."""
        return _LOGGING_LEVELS[self]

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.level >= other.level

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.level > other.level

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.level <= other.level

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.level < other.level


_LOGGING_LEVELS: dict[Severity, int] = {
    Severity.TRACE: TRACE,
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
    Severity.PANIC: PANIC,
}

_ALIASES: dict[str, Severity] = {
    "warning": Severity.WARN,
    "critical": Severity.FATAL,
}


def parse_severity(value: str | Severity) -> Severity:
    """Parse a severity name.

    Args:
        value: Severity name (case-insensitive) or Severity instance.

    Returns:
        Matching Severity.

    Raises:
        InvalidSeverityError: If the name is not a known severity.
    """
    if isinstance(value, Severity):
        return value
    name = value.strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return Severity(name)
    except ValueError:
        valid = ", ".join(f"'{s.value}'" for s in Severity)
        msg = f"Invalid log level '{value}'. Possible values are {valid}"
        raise InvalidSeverityError(msg) from None


def severity_for_level(levelno: int) -> Severity:
    """Map a stdlib logging level to the closest severity at or below it."""
    result = Severity.TRACE
    for severity in Severity:
        if severity.level <= levelno:
            result = severity
    return result


@dataclass(frozen=True, slots=True)
class Event:
    """A leveled event delivered to the logging and notification sinks.

    Attributes:
        message: Human-readable message (empty for baseline entry events).
        severity: Event severity.
        fields: Structured context (filename, mode, ModTime, path, err, ...).
    """

    message: str
    severity: Severity
    fields: dict[str, Any] = field(default_factory=lambda: {})
