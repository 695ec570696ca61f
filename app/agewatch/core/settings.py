"""Watch settings and their resolution from all configuration sources.

Settings are built once at startup and passed explicitly to the
scheduler, walker, classifier and emitter. Sources are merged with
precedence CLI/environment (resolved by typer) > config file > defaults.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from agewatch.core.config_file import ConfigFileError, load_config_file
from agewatch.core.paths import get_config_path
from agewatch.events.emitter import DEFAULT_AGE_WARNING
from agewatch.events.models import Severity, parse_severity
from agewatch.filesystem.classifier import AgePolicy

logger = logging.getLogger(__name__)


class ErrorPolicy(str, Enum):
    """What a cycle does when a root cannot be walked.

    Attributes:
        ABORT: Emit a fatal record and terminate (default).
        CONTINUE: Keep walking the other roots, report failures at end of cycle.
    """

    ABORT = "abort"
    CONTINUE = "continue"


class SettingsError(Exception):
    """Raised when the resolved settings are invalid."""


class WatchSettings(BaseModel):
    """Immutable configuration for a watch process.

    Attributes:
        poll: Seconds to sleep between cycles.
        max_age: Maximum entry age in seconds before it is reported.
        log_level: Minimum severity written to the log.
        age_warning: Message of the error event for a stale entry.
        notify_level: Minimum severity forwarded to the notifier.
        slack_webhook: Slack incoming webhook URL (None disables notifications).
        slack_channel: Slack channel to post to.
        slack_icon: Slack message icon emoji.
        directories: Root paths to walk, in order.
        ignore_folders: Exempt directories from the age check.
        on_error: Behaviour when a root cannot be walked.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    poll: Annotated[int, Field(ge=0, description="Polling interval in seconds")] = 60
    max_age: Annotated[int, Field(ge=0, description="Max entry age in seconds")] = 1800
    log_level: Severity = Severity.INFO
    age_warning: str = DEFAULT_AGE_WARNING
    notify_level: Severity = Severity.ERROR
    slack_webhook: str | None = None
    slack_channel: str = "alerts"
    slack_icon: str = ":ghost:"
    directories: tuple[str, ...] = ()
    ignore_folders: bool = True
    on_error: ErrorPolicy = ErrorPolicy.ABORT

    @field_validator("log_level", "notify_level", mode="before")
    @classmethod
    def validate_severity(cls, v: object) -> Severity:
        """Accept severity names in any case (and the 'warning' alias)."""
        if isinstance(v, str):
            return parse_severity(v)
        if isinstance(v, Severity):
            return v
        msg = f"severity must be a string, got {type(v).__name__}"
        raise ValueError(msg)

    @field_validator("slack_webhook", mode="before")
    @classmethod
    def empty_webhook_is_none(cls, v: object) -> object:
        """Treat an empty webhook as notifications disabled."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def policy(self) -> AgePolicy:
        """Age policy derived from max_age and ignore_folders."""
        return AgePolicy(max_age=self.max_age, ignore_directories=self.ignore_folders)

    @property
    def notifications_enabled(self) -> bool:
        """True if a Slack webhook is configured."""
        return self.slack_webhook is not None


def resolve_settings(
    cli_values: dict[str, Any],
    *,
    config_path: Path | None = None,
) -> WatchSettings:
    """Merge CLI/environment values with the config file into WatchSettings.

    Values that are None in ``cli_values`` were not given on the command
    line nor in the environment and fall back to the config file, then to
    the model defaults. The ``directory`` value (single extra root) is
    appended to ``directories`` after the positional roots.

    Args:
        cli_values: Field values from typer (None = not given).
        config_path: Explicit config file. If None, the default XDG config
            file is used when it exists.

    Returns:
        Validated, immutable WatchSettings.

    Raises:
        ConfigFileError: If the config file cannot be read or parsed.
        SettingsError: If the merged values fail validation.
        InvalidSeverityError: If a severity name is invalid.
    """
    file_values: dict[str, str] = {}
    path = config_path
    if path is None:
        default_path = get_config_path()
        if default_path.is_file():
            path = default_path
    if path is not None:
        if not path.is_file():
            raise ConfigFileError(f"Config file not found: {path}")
        file_values = load_config_file(path)

    merged: dict[str, Any] = dict(file_values)
    for key, value in cli_values.items():
        if value is not None:
            merged[key] = value

    # Severities are parsed up front so that bad names surface as
    # InvalidSeverityError rather than a generic validation error
    for key in ("log_level", "notify_level"):
        if key in merged:
            merged[key] = parse_severity(merged[key])

    roots = [str(d) for d in merged.pop("directories", None) or ()]
    extra = merged.pop("directory", None)
    if extra:
        roots.append(str(extra))
    merged["directories"] = tuple(roots)

    try:
        return WatchSettings.model_validate(merged)
    except ValidationError as e:
        raise SettingsError(_format_validation_error(e)) from e


def _format_validation_error(error: ValidationError) -> str:
    """Render a pydantic ValidationError as a short one-line message."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "settings"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
