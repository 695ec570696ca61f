"""Leveled event stream.

This module provides the severity model, the event record, and the
emitter that fans events out to the logging and notification sinks.
"""

from agewatch.events.emitter import DEFAULT_AGE_WARNING, EVENTS_LOGGER_NAME, EventEmitter
from agewatch.events.models import (
    Event,
    InvalidSeverityError,
    Severity,
    parse_severity,
    severity_for_level,
)

__all__ = [
    "DEFAULT_AGE_WARNING",
    "EVENTS_LOGGER_NAME",
    "Event",
    "EventEmitter",
    "InvalidSeverityError",
    "Severity",
    "parse_severity",
    "severity_for_level",
]
