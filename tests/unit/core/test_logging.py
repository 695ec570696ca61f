"""Unit tests for the JSON logging setup."""

import io
import json
import logging

from agewatch.core.logging import JsonFormatter, setup_logging
from agewatch.events.models import PANIC, TRACE, Severity


def _record(level: int, msg: str, fields: object = None) -> logging.LogRecord:
    record = logging.LogRecord("agewatch.events", level, __file__, 1, msg, None, None)
    if fields is not None:
        record.fields = fields
    return record


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_fields_flattened(self) -> None:
        output = JsonFormatter().format(
            _record(logging.INFO, "", {"filename": "/q/a.txt", "mode": "-rw-r--r--"})
        )

        data = json.loads(output)
        assert data["filename"] == "/q/a.txt"
        assert data["mode"] == "-rw-r--r--"
        assert data["msg"] == ""
        assert data["level"] == "info"
        assert "time" in data

    def test_single_line(self) -> None:
        output = JsonFormatter().format(_record(logging.ERROR, "File age", {"a": "x\ny"}))
        assert "\n" not in output

    def test_level_names(self) -> None:
        formatter = JsonFormatter()
        levels = {
            TRACE: "trace",
            logging.DEBUG: "debug",
            logging.WARNING: "warn",
            logging.CRITICAL: "fatal",
            PANIC: "panic",
        }
        for levelno, name in levels.items():
            assert json.loads(formatter.format(_record(levelno, "m")))["level"] == name

    def test_reserved_field_names_prefixed(self) -> None:
        output = JsonFormatter().format(_record(logging.INFO, "real", {"msg": "shadow"}))

        data = json.loads(output)
        assert data["msg"] == "real"
        assert data["fields.msg"] == "shadow"

    def test_non_serializable_values_stringified(self) -> None:
        output = JsonFormatter().format(_record(logging.INFO, "m", {"err": OSError("boom")}))
        assert json.loads(output)["err"] == "boom"

    def test_record_without_fields(self) -> None:
        data = json.loads(JsonFormatter().format(_record(logging.WARNING, "plain")))
        assert data["msg"] == "plain"


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_json_to_stream(self) -> None:
        stream = io.StringIO()
        logger = setup_logging(Severity.INFO, stream=stream)

        logger.getChild("events").info("", extra={"fields": {"filename": "/q/a"}})

        data = json.loads(stream.getvalue())
        assert data["filename"] == "/q/a"

    def test_level_filters_records(self) -> None:
        stream = io.StringIO()
        logger = setup_logging(Severity.ERROR, stream=stream)

        logger.info("hidden")
        logger.error("shown")

        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["msg"] == "shown"

    def test_second_call_replaces_handler(self) -> None:
        first = io.StringIO()
        second = io.StringIO()
        setup_logging(stream=first)
        logger = setup_logging(stream=second)

        logger.warning("once")

        assert len(logger.handlers) == 1
        assert first.getvalue() == ""
        assert "once" in second.getvalue()
