"""Tests for the Slack webhook notifier."""

import json
import logging

import httpx
import pytest
from agewatch.events.models import Event, Severity
from agewatch.notify.slack import SlackNotifier

_WEBHOOK = "https://hooks.slack.test/services/T000/B000/XXXX"


def _client(handler: object) -> httpx.Client:
    """Create an httpx client backed by a mock transport."""
    return httpx.Client(transport=httpx.MockTransport(handler))  # type: ignore[arg-type]


def _stale_event() -> Event:
    return Event(
        message="File age",
        severity=Severity.ERROR,
        fields={"filename": "/queue/old.log", "mode": "-rw-r--r--"},
    )


class TestSlackNotifierInit:
    """Tests for SlackNotifier construction."""

    def test_empty_webhook_rejected(self) -> None:
        with pytest.raises(ValueError, match="webhook URL cannot be empty"):
            SlackNotifier("")

    def test_channel_gets_hash_prefix(self) -> None:
        notifier = SlackNotifier(_WEBHOOK, channel="alerts", client=_client(lambda r: None))
        assert notifier.channel == "#alerts"

    def test_channel_hash_kept(self) -> None:
        notifier = SlackNotifier(_WEBHOOK, channel="#ops", client=_client(lambda r: None))
        assert notifier.channel == "#ops"

    def test_name(self) -> None:
        assert SlackNotifier(_WEBHOOK, client=_client(lambda r: None)).name == "slack"


class TestBuildPayload:
    """Tests for the webhook payload."""

    def test_payload_shape(self) -> None:
        notifier = SlackNotifier(
            _WEBHOOK, channel="alerts", icon=":ghost:", client=_client(lambda r: None)
        )

        payload = notifier.build_payload(_stale_event())

        assert payload["channel"] == "#alerts"
        assert payload["icon_emoji"] == ":ghost:"
        attachment = payload["attachments"][0]  # type: ignore[index]
        assert attachment["text"] == "File age"
        assert attachment["color"] == "danger"
        assert attachment["title"] == "ERROR"
        assert {"title": "filename", "value": "/queue/old.log", "short": True} in attachment[
            "fields"
        ]
        assert isinstance(attachment["ts"], int)

    def test_empty_message_falls_back_to_severity(self) -> None:
        notifier = SlackNotifier(_WEBHOOK, client=_client(lambda r: None))

        payload = notifier.build_payload(Event(message="", severity=Severity.INFO))

        assert payload["attachments"][0]["text"] == "info"  # type: ignore[index]
        assert payload["attachments"][0]["color"] == "good"  # type: ignore[index]


class TestPost:
    """Tests for SlackNotifier.post."""

    def test_post_success(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text="ok")

        notifier = SlackNotifier(_WEBHOOK, client=_client(handler))

        assert notifier.post(_stale_event()) is True
        assert len(requests) == 1
        assert str(requests[0].url) == _WEBHOOK
        assert requests[0].method == "POST"
        body = json.loads(requests[0].content)
        assert body["channel"] == "#alerts"
        assert body["attachments"][0]["text"] == "File age"

    def test_post_http_error(self, caplog: pytest.LogCaptureFixture) -> None:
        """Non-2xx responses are logged and reported as False."""
        notifier = SlackNotifier(
            _WEBHOOK, client=_client(lambda r: httpx.Response(404, text="channel_not_found"))
        )

        with caplog.at_level(logging.WARNING, logger="agewatch.notify.slack"):
            assert notifier.post(_stale_event()) is False

        assert "HTTP 404" in caplog.text
        assert "channel_not_found" in caplog.text

    def test_post_transport_error(self, caplog: pytest.LogCaptureFixture) -> None:
        """Connection failures are logged and reported as False."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        notifier = SlackNotifier(_WEBHOOK, client=_client(handler))

        with caplog.at_level(logging.WARNING, logger="agewatch.notify.slack"):
            assert notifier.post(_stale_event()) is False

        assert "connection refused" in caplog.text

    def test_close_closes_client(self) -> None:
        client = _client(lambda r: httpx.Response(200))
        notifier = SlackNotifier(_WEBHOOK, client=client)

        notifier.close()

        assert client.is_closed
