"""Notification sinks for events above the configured severity."""

from agewatch.notify.base import NotificationError, Notifier
from agewatch.notify.slack import SlackNotifier

__all__ = ["NotificationError", "Notifier", "SlackNotifier"]
