"""Unit tests for the "name value" config file reader."""

import re
from pathlib import Path

import pytest
from agewatch.core.config_file import (
    ConfigFileError,
    ConfigFileParseError,
    load_config_file,
    normalize_option_name,
    parse_config_text,
)


class TestNormalizeOptionName:
    """Tests for normalize_option_name."""

    @pytest.mark.parametrize("name", ["maxAge", "max_age", "MAX-AGE", " maxage "])
    def test_variants_normalize_equally(self, name: str) -> None:
        assert normalize_option_name(name) == "maxage"


class TestParseConfigText:
    """Tests for parse_config_text."""

    def test_space_separated(self) -> None:
        assert parse_config_text("poll 30\nmaxAge 600\n") == {"poll": "30", "max_age": "600"}

    def test_equals_separated(self) -> None:
        assert parse_config_text("poll=30\nmaxAge = 600") == {"poll": "30", "max_age": "600"}

    def test_value_with_spaces(self) -> None:
        assert parse_config_text("ageWarning Queue file stuck") == {
            "age_warning": "Queue file stuck"
        }

    def test_value_with_equals_sign(self) -> None:
        """Only the first separator splits; URLs with '=' survive."""
        result = parse_config_text("slackWebhook https://hooks.example/x?a=b")
        assert result == {"slack_webhook": "https://hooks.example/x?a=b"}

    def test_quoted_value(self) -> None:
        assert parse_config_text('slackIcon ":ghost:"') == {"slack_icon": ":ghost:"}

    def test_comments_and_blank_lines_ignored(self) -> None:
        text = "# watch config\n\n   \npoll 5\n# maxAge 1\n"
        assert parse_config_text(text) == {"poll": "5"}

    def test_bare_name_is_true(self) -> None:
        assert parse_config_text("ignoreFolders") == {"ignore_folders": "true"}

    def test_later_lines_override(self) -> None:
        assert parse_config_text("poll 5\npoll 7") == {"poll": "7"}

    def test_slack_warn_level_alias(self) -> None:
        """The slackWarnLevel name maps to notify_level."""
        assert parse_config_text("slackWarnLevel warn") == {"notify_level": "warn"}

    def test_directory_option(self) -> None:
        assert parse_config_text("directory /srv/queue") == {"directory": "/srv/queue"}

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigFileParseError, match="cfg:2: unknown option 'colour'"):
            parse_config_text("poll 5\ncolour red", source="cfg")

    def test_missing_name(self) -> None:
        with pytest.raises(ConfigFileParseError, match="missing option name"):
            parse_config_text("= 5")


class TestLoadConfigFile:
    """Tests for load_config_file."""

    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "agewatch.conf"
        path.write_text("poll 15\nignoreFolders false\n")

        assert load_config_file(path) == {"poll": "15", "ignore_folders": "false"}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigFileError, match="Failed to read config file"):
            load_config_file(tmp_path / "missing.conf")

    def test_parse_error_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.conf"
        path.write_text("nope 1\n")

        with pytest.raises(ConfigFileParseError, match=re.escape(str(path))):
            load_config_file(path)
