"""Watch command implementation.

Polls the configured directories forever and reports entries that are
older than the max age, until terminated by SIGINT or SIGTERM.
"""

import signal
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType

import typer

from agewatch.cli.exit_codes import ExitCode
from agewatch.cli.options import (
    AgeWarningOpt,
    ConfigOpt,
    DirectoriesArg,
    DirectoryOpt,
    IgnoreFoldersOpt,
    LogLevelOpt,
    MaxAgeOpt,
    NotifyLevelOpt,
    OnErrorOpt,
    PollOpt,
    SlackChannelOpt,
    SlackIconOpt,
    SlackWebhookOpt,
    load_settings,
)
from agewatch.core.logging import setup_logging
from agewatch.core.scheduler import PollScheduler
from agewatch.core.settings import WatchSettings
from agewatch.events.emitter import EventEmitter
from agewatch.filesystem.walker import TraversalError
from agewatch.notify.base import Notifier
from agewatch.notify.slack import SlackNotifier
from agewatch.utils.formatting import console, print_error

_TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def watch(
    directories: DirectoriesArg = None,
    directory: DirectoryOpt = None,
    poll: PollOpt = None,
    max_age: MaxAgeOpt = None,
    log_level: LogLevelOpt = None,
    age_warning: AgeWarningOpt = None,
    notify_level: NotifyLevelOpt = None,
    slack_webhook: SlackWebhookOpt = None,
    slack_channel: SlackChannelOpt = None,
    slack_icon: SlackIconOpt = None,
    ignore_folders: IgnoreFoldersOpt = None,
    on_error: OnErrorOpt = None,
    config: ConfigOpt = None,
) -> None:
    """Poll directories for files older than the max age.

    Every entry is logged at info level; entries older than --max-age are
    additionally logged at error level and, above --notify-level, posted
    to Slack. Runs until Ctrl+C.
    """
    settings = load_settings(
        {
            "directories": directories,
            "directory": directory,
            "poll": poll,
            "max_age": max_age,
            "log_level": log_level,
            "age_warning": age_warning,
            "notify_level": notify_level,
            "slack_webhook": slack_webhook,
            "slack_channel": slack_channel,
            "slack_icon": slack_icon,
            "ignore_folders": ignore_folders,
            "on_error": on_error,
        },
        config,
    )

    setup_logging(settings.log_level)
    emitter = EventEmitter(
        notifier=create_notifier(settings),
        notify_level=settings.notify_level,
        age_warning=settings.age_warning,
    )
    scheduler = PollScheduler(settings, emitter)

    _print_banner(settings.directories)

    try:
        with termination_listener(scheduler) as received:
            scheduler.run()
        if received:
            console.print(f"\nreceived {received[0]}, exiting...")
    except TraversalError as e:
        print_error(str(e))
        raise typer.Exit(code=ExitCode.TRAVERSAL) from e
    finally:
        emitter.close()

    raise typer.Exit(code=ExitCode.INTERRUPTED)


def create_notifier(settings: WatchSettings) -> Notifier | None:
    """Create the Slack notifier if a webhook is configured."""
    if not settings.notifications_enabled or settings.slack_webhook is None:
        return None
    return SlackNotifier(
        settings.slack_webhook,
        channel=settings.slack_channel,
        icon=settings.slack_icon,
    )


@contextmanager
def termination_listener(scheduler: PollScheduler) -> Iterator[list[str]]:
    """Stop the scheduler on SIGINT/SIGTERM while the block runs.

    The first signal asks the scheduler to stop at its next phase
    boundary. A second signal exits immediately. The handler only records
    the signal name and sets the stop flag; it neither prints nor takes
    locks. Previous handlers are restored on exit.

    Args:
        scheduler: Scheduler to stop.

    Yields:
        Names of the signals received so far, in arrival order.
    """
    received: list[str] = []

    def _handle(signum: int, _frame: FrameType | None) -> None:
        if scheduler.stop_requested:
            raise SystemExit(ExitCode.INTERRUPTED)
        received.append(signal.Signals(signum).name)
        scheduler.stop()

    previous = {sig: signal.signal(sig, _handle) for sig in _TERMINATION_SIGNALS}
    try:
        yield received
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)


def _print_banner(directories: tuple[str, ...]) -> None:
    """Print the list of watched directories."""
    console.print("Watching the following directories:")
    for path in directories:
        console.print(f"- {path}", highlight=False)
    console.print("[muted]Press Ctrl+C to end[/]")
