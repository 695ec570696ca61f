"""Abstract base class for notification sinks.

This module defines the Notifier interface used by the event emitter
to forward events that pass the severity gate.
"""

from abc import ABC, abstractmethod

from agewatch.events.models import Event


class NotificationError(Exception):
    """Raised by notifier implementations when delivery fails."""


class Notifier(ABC):
    """Abstract base class for all notification sinks.

    Notifiers are best-effort: ``post`` reports delivery failures through
    its return value and never raises into the caller.

    Example:
        >>> notifier = SlackNotifier(webhook_url, channel="alerts")
        >>> notifier.post(Event("File age", Severity.ERROR, {"filename": "/q/a"}))
        True
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return a short identifier for logging (e.g. "slack")."""

    @abstractmethod
    def post(self, event: Event) -> bool:
        """Deliver an event.

        Args:
            event: Event that passed the severity gate.

        Returns:
            True if the event was delivered, False otherwise.
        """

    def close(self) -> None:
        """Release any resources held by the notifier."""
