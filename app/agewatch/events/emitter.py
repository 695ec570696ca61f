"""Event emitter fanning events out to the logging and notification sinks.

Every event is written to the logging sink. Events whose severity is at
or above the notification threshold are also handed to the notifier.
"""

import logging

from agewatch.events.models import Event, Severity
from agewatch.filesystem.models import Classification, EntryDescriptor
from agewatch.filesystem.walker import TraversalError
from agewatch.notify.base import Notifier

logger = logging.getLogger(__name__)

# Sink for the event stream itself; configured by setup_logging()
EVENTS_LOGGER_NAME = "agewatch.events"

DEFAULT_AGE_WARNING = "File age"


class EventEmitter:
    """Converts classified entries into leveled events.

    Args:
        notifier: Optional notification sink. If None, only logging is used.
        notify_level: Minimum severity forwarded to the notifier.
        age_warning: Message attached to the error event of a stale entry.
        sink: Logger receiving every event. Defaults to ``agewatch.events``.
    """

    def __init__(
        self,
        *,
        notifier: Notifier | None = None,
        notify_level: Severity = Severity.ERROR,
        age_warning: str = DEFAULT_AGE_WARNING,
        sink: logging.Logger | None = None,
    ) -> None:
        self._notifier = notifier
        self._notify_level = notify_level
        self._age_warning = age_warning
        self._sink = sink or logging.getLogger(EVENTS_LOGGER_NAME)

    def forwards(self, event: Event) -> bool:
        """Check whether an event passes the notification severity gate.

        Args:
            event: Event to check.

        Returns:
            True if a notifier is configured and the event severity is at
            or above the notification threshold.
        """
        return self._notifier is not None and event.severity >= self._notify_level

    def emit(self, event: Event) -> None:
        """Deliver an event to the logging sink and, if gated in, the notifier.

        Args:
            event: Event to deliver.
        """
        self._sink.log(event.severity.level, event.message, extra={"fields": dict(event.fields)})
        if self._notifier is not None and self.forwards(event):
            self._notifier.post(event)

    def emit_entry(self, entry: EntryDescriptor, classification: Classification) -> list[Event]:
        """Emit the events for one classified entry.

        Every entry gets a baseline info event. Stale entries additionally
        get an error event carrying the age warning.

        Args:
            entry: Walked entry.
            classification: Result of the age policy for this entry.

        Returns:
            The events emitted, in order.
        """
        events = [Event(message="", severity=Severity.INFO, fields=entry.event_fields)]
        if classification == Classification.STALE:
            events.append(
                Event(message=self._age_warning, severity=Severity.ERROR, fields=entry.event_fields)
            )
        for event in events:
            self.emit(event)
        return events

    def emit_traversal_error(self, root: str, error: TraversalError, *, fatal: bool) -> Event:
        """Emit the record for a root that could not be walked.

        Args:
            root: Configured root whose walk failed.
            error: The traversal error raised by the walker.
            fatal: If True the record is FATAL, otherwise ERROR.

        Returns:
            The emitted event.
        """
        event = Event(
            message="Unable to walk through directory!",
            severity=Severity.FATAL if fatal else Severity.ERROR,
            fields={"path": root, "failed_path": error.path, "err": str(error.cause)},
        )
        self.emit(event)
        return event

    def close(self) -> None:
        """Flush the logging sink and release the notifier."""
        for handler in _effective_handlers(self._sink):
            handler.flush()
        if self._notifier is not None:
            self._notifier.close()
            logger.debug("Closed %s notifier", self._notifier.name)


def _effective_handlers(sink: logging.Logger) -> list[logging.Handler]:
    """Collect the handlers a record logged on ``sink`` would reach."""
    handlers: list[logging.Handler] = []
    current: logging.Logger | None = sink
    while current is not None:
        handlers.extend(current.handlers)
        if not current.propagate:
            break
        current = current.parent
    return handlers
