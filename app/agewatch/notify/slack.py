"""Slack incoming-webhook notifier.

Posts one message per event to a Slack channel with a configurable
icon. Each event becomes a single attachment coloured by severity,
with the event fields rendered as short attachment fields.
"""

import logging
import time

import httpx

from agewatch.events.models import Event, Severity
from agewatch.notify.base import NotificationError, Notifier

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_S = 10.0

_SEVERITY_COLORS: dict[Severity, str] = {
    Severity.TRACE: "#b2bec3",
    Severity.DEBUG: "#b2bec3",
    Severity.INFO: "good",
    Severity.WARN: "warning",
    Severity.ERROR: "danger",
    Severity.FATAL: "danger",
    Severity.PANIC: "danger",
}


class SlackNotifier(Notifier):
    """Notifier posting events to a Slack incoming webhook.

    Args:
        webhook_url: Slack incoming webhook URL.
        channel: Channel name, with or without the leading '#'.
        icon: Emoji used as the message icon (e.g. ":ghost:").
        client: Optional preconfigured httpx client (tests inject one
            with a mock transport). Owned by the notifier either way.
    """

    def __init__(
        self,
        webhook_url: str,
        *,
        channel: str = "alerts",
        icon: str = ":ghost:",
        client: httpx.Client | None = None,
    ) -> None:
        if not webhook_url:
            msg = "Slack webhook URL cannot be empty"
            raise ValueError(msg)
        self._webhook_url = webhook_url
        self._channel = channel if channel.startswith("#") else f"#{channel}"
        self._icon = icon
        self._client = client or httpx.Client(timeout=httpx.Timeout(_DEFAULT_TIMEOUT_S))

    @property
    def name(self) -> str:
        return "slack"

    @property
    def channel(self) -> str:
        """Channel the notifier posts to, including the '#' prefix."""
        return self._channel

    def build_payload(self, event: Event) -> dict[str, object]:
        """Build the webhook JSON payload for an event.

        Args:
            event: Event to render.

        Returns:
            Dictionary ready to be sent as the request JSON body.
        """
        fields = [
            {"title": key, "value": str(value), "short": True}
            for key, value in sorted(event.fields.items())
        ]
        text = event.message or event.severity.value
        return {
            "channel": self._channel,
            "icon_emoji": self._icon,
            "attachments": [
                {
                    "fallback": text,
                    "color": _SEVERITY_COLORS[event.severity],
                    "title": event.severity.value.upper(),
                    "text": text,
                    "fields": fields,
                    "ts": int(time.time()),
                }
            ],
        }

    def post(self, event: Event) -> bool:
        """Post an event to the webhook.

        Delivery failures are logged as warnings. These records go to the
        local logging sink only, never back through a notifier.

        Args:
            event: Event to deliver.

        Returns:
            True if Slack accepted the message, False otherwise.
        """
        try:
            self._send(self.build_payload(event))
        except NotificationError as e:
            logger.warning("Slack notification to %s failed: %s", self._channel, e)
            return False
        return True

    def _send(self, payload: dict[str, object]) -> None:
        """Send a payload, raising NotificationError on any failure."""
        try:
            response = self._client.post(self._webhook_url, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f"HTTP {e.response.status_code}: {e.response.text.strip()}"
            raise NotificationError(msg) from e
        except httpx.HTTPError as e:
            raise NotificationError(str(e) or type(e).__name__) from e

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()
