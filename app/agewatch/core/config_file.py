"""Reader for the plain-text "name value" config file.

Each non-empty line holds one option as ``name value`` or ``name=value``.
Lines starting with '#' are comments. Option names are matched
case-insensitively and without '-' or '_', so ``maxAge``, ``max_age``
and ``MAX-AGE`` all set the same option.
"""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_LINE_RE = re.compile(r"^([^\s=]+)(\s*=\s*|\s+)?(.*)$")

# Normalized option name -> settings field
OPTION_FIELDS: dict[str, str] = {
    "poll": "poll",
    "maxage": "max_age",
    "loglevel": "log_level",
    "agewarning": "age_warning",
    "notifylevel": "notify_level",
    "slackwarnlevel": "notify_level",
    "slackwebhook": "slack_webhook",
    "slackchannel": "slack_channel",
    "slackicon": "slack_icon",
    "directory": "directory",
    "ignorefolders": "ignore_folders",
    "onerror": "on_error",
}


class ConfigFileError(Exception):
    """Base exception for config file errors."""


class ConfigFileParseError(ConfigFileError):
    """Raised when a config file line cannot be parsed."""


def normalize_option_name(name: str) -> str:
    """Normalize an option name for lookup in OPTION_FIELDS."""
    return name.strip().lower().replace("-", "").replace("_", "")


def parse_config_text(text: str, *, source: str = "<config>") -> dict[str, str]:
    """Parse config file content into settings field values.

    Args:
        text: File content.
        source: Name used in error messages.

    Returns:
        Mapping of settings field name to raw string value. Later lines
        override earlier ones.

    Raises:
        ConfigFileParseError: On malformed lines or unknown option names.
    """
    values: dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        name, value = _split_line(line)
        if not name:
            msg = f"{source}:{lineno}: missing option name"
            raise ConfigFileParseError(msg)

        field = OPTION_FIELDS.get(normalize_option_name(name))
        if field is None:
            msg = f"{source}:{lineno}: unknown option '{name}'"
            raise ConfigFileParseError(msg)

        values[field] = _unquote(value)
    return values


def load_config_file(path: Path) -> dict[str, str]:
    """Load and parse a config file.

    Args:
        path: Path to the config file.

    Returns:
        Mapping of settings field name to raw string value.

    Raises:
        ConfigFileError: If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(f"Failed to read config file {path}: {e}") from e

    values = parse_config_text(text, source=str(path))
    logger.debug("Loaded %d option(s) from %s", len(values), path)
    return values


def _split_line(line: str) -> tuple[str, str]:
    """Split a line into name and value on '=' or the first whitespace run."""
    match = _LINE_RE.match(line)
    if match is None:
        return "", line
    name, separator, value = match.groups()
    if not separator and not value:
        # Bare name, e.g. a boolean switched on
        return name, "true"
    return name, value.strip()


def _unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
