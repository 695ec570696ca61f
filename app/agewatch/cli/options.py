"""Shared CLI options and settings loading for agewatch commands.

Every option can also be set through an environment variable (POLL,
MAXAGE, LOGLEVEL, SLACKWARNLEVEL, ...) and through the config file.
"""

from pathlib import Path
from typing import Annotated, Any

import typer

from agewatch.cli.exit_codes import ExitCode
from agewatch.core.config_file import ConfigFileError
from agewatch.core.settings import ErrorPolicy, SettingsError, WatchSettings, resolve_settings
from agewatch.events.models import InvalidSeverityError
from agewatch.utils.formatting import print_error

DirectoriesArg = Annotated[
    list[str] | None,
    typer.Argument(help="Root directories to watch.", show_default=False),
]
DirectoryOpt = Annotated[
    str | None,
    typer.Option("--directory", "-d", envvar="DIRECTORY", help="Extra directory, added to the list."),
]
PollOpt = Annotated[
    int | None,
    typer.Option("--poll", "-p", envvar="POLL", help="Polling interval in seconds [default: 60]."),
]
MaxAgeOpt = Annotated[
    int | None,
    typer.Option(
        "--max-age",
        "-a",
        envvar="MAXAGE",
        help="Max age of an entry in seconds [default: 1800].",
    ),
]
LogLevelOpt = Annotated[
    str | None,
    typer.Option(
        "--log-level",
        "-l",
        envvar="LOGLEVEL",
        help="Minimum log level: panic, fatal, error, warn, info, debug, trace [default: info].",
    ),
]
AgeWarningOpt = Annotated[
    str | None,
    typer.Option(
        "--age-warning",
        envvar="AGEWARNING",
        help="Message logged for an entry that is too old [default: File age].",
    ),
]
NotifyLevelOpt = Annotated[
    str | None,
    typer.Option(
        "--notify-level",
        envvar="SLACKWARNLEVEL",
        help="Minimum level sent to Slack [default: error].",
    ),
]
SlackWebhookOpt = Annotated[
    str | None,
    typer.Option("--slack-webhook", envvar="SLACKWEBHOOK", help="Slack incoming webhook URL."),
]
SlackChannelOpt = Annotated[
    str | None,
    typer.Option("--slack-channel", envvar="SLACKCHANNEL", help="Slack channel [default: alerts]."),
]
SlackIconOpt = Annotated[
    str | None,
    typer.Option("--slack-icon", envvar="SLACKICON", help="Slack message icon [default: :ghost:]."),
]
IgnoreFoldersOpt = Annotated[
    str | None,
    typer.Option(
        "--ignore-folders",
        envvar="IGNOREFOLDERS",
        metavar="BOOL",
        help="Only check files, never directories, for age [default: true].",
    ),
]
OnErrorOpt = Annotated[
    ErrorPolicy | None,
    typer.Option(
        "--on-error",
        envvar="ONERROR",
        case_sensitive=False,
        help="On an unreadable directory: abort, or continue with the other roots [default: abort].",
    ),
]
ConfigOpt = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        envvar="CONFIG",
        help="Config file with 'name value' lines [default: ~/.config/agewatch/agewatch.conf].",
    ),
]


def load_settings(values: dict[str, Any], config: Path | None = None) -> WatchSettings:
    """Resolve settings for a command, exiting on configuration errors.

    Args:
        values: Option values collected by typer (None = not given).
        config: Explicit config file path.

    Returns:
        Validated WatchSettings with at least one root directory.

    Raises:
        typer.Exit: With INVALID_LEVEL, USAGE or NO_DIRECTORIES.
    """
    try:
        settings = resolve_settings(values, config_path=config)
    except InvalidSeverityError as e:
        print_error(str(e))
        raise typer.Exit(code=ExitCode.INVALID_LEVEL) from e
    except (ConfigFileError, SettingsError) as e:
        print_error(str(e))
        raise typer.Exit(code=ExitCode.USAGE) from e

    if not settings.directories:
        print_error("No directory given!")
        raise typer.Exit(code=ExitCode.NO_DIRECTORIES)

    return settings
