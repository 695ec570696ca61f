"""Unit tests for Notifier ABC."""

import pytest
from agewatch.events.models import Event, Severity
from agewatch.notify.base import Notifier


class ConcreteNotifier(Notifier):
    """Concrete implementation for testing the ABC."""

    def __init__(self) -> None:
        self.events: list[Event] = []

    @property
    def name(self) -> str:
        return "concrete"

    def post(self, event: Event) -> bool:
        self.events.append(event)
        return True


class TestNotifier:
    """Tests for Notifier ABC."""

    def test_cannot_instantiate_abc(self) -> None:
        with pytest.raises(TypeError):
            Notifier()  # type: ignore[abstract]

    def test_concrete_post(self) -> None:
        notifier = ConcreteNotifier()
        event = Event("File age", Severity.ERROR)

        assert notifier.post(event) is True
        assert notifier.events == [event]

    def test_default_close_is_noop(self) -> None:
        ConcreteNotifier().close()
