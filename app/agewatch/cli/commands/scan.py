"""Scan command implementation.

Runs a single cycle over the configured directories and prints the
stale entries. Exits non-zero when a root could not be walked or
anything is stale, which makes it usable from cron or a CI job.
"""

import json
from enum import Enum
from typing import Annotated

import typer

from agewatch.cli.exit_codes import STALE_FOUND, ExitCode
from agewatch.cli.options import (
    AgeWarningOpt,
    ConfigOpt,
    DirectoriesArg,
    DirectoryOpt,
    IgnoreFoldersOpt,
    LogLevelOpt,
    MaxAgeOpt,
    OnErrorOpt,
    load_settings,
)
from agewatch.core.logging import setup_logging
from agewatch.core.scheduler import CycleReport, PollScheduler
from agewatch.core.settings import WatchSettings
from agewatch.events.emitter import EventEmitter
from agewatch.filesystem.models import EntryDescriptor
from agewatch.filesystem.walker import TraversalError
from agewatch.utils.formatting import (
    console,
    create_entries_table,
    print_error,
    print_success,
    print_warning,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def scan(
    directories: DirectoriesArg = None,
    directory: DirectoryOpt = None,
    max_age: MaxAgeOpt = None,
    log_level: LogLevelOpt = None,
    age_warning: AgeWarningOpt = None,
    ignore_folders: IgnoreFoldersOpt = None,
    on_error: OnErrorOpt = None,
    config: ConfigOpt = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Scan directories once and list entries older than the max age."""
    settings = load_settings(
        {
            "directories": directories,
            "directory": directory,
            "max_age": max_age,
            "log_level": log_level,
            "age_warning": age_warning,
            "ignore_folders": ignore_folders,
            "on_error": on_error,
        },
        config,
    )

    setup_logging(settings.log_level)
    emitter = EventEmitter(age_warning=settings.age_warning)
    scheduler = PollScheduler(settings, emitter)

    try:
        report = scheduler.run_cycle()
    except TraversalError as e:
        print_error(str(e))
        raise typer.Exit(code=ExitCode.TRAVERSAL) from e
    finally:
        emitter.close()

    if output_format == OutputFormat.JSON:
        _print_json(settings, report)
    else:
        _print_table(settings, report)

    if report.errors:
        raise typer.Exit(code=ExitCode.TRAVERSAL)
    if report.stale:
        raise typer.Exit(code=STALE_FOUND)


def _print_table(settings: WatchSettings, report: CycleReport) -> None:
    """Display stale entries as a Rich table followed by a summary."""
    for failure in report.errors:
        print_warning(f"Skipped {failure.root}: {failure.error}")

    if not report.stale:
        print_success(f"No entries older than {settings.max_age}s ({report.entries} checked).")
        return

    console.print(create_entries_table(report.stale))
    console.print(
        f"\n[muted]Found {report.stale_count} stale of {report.entries} entries "
        f"(max age {settings.max_age}s)[/muted]"
    )


def _print_json(settings: WatchSettings, report: CycleReport) -> None:
    """Display the cycle report as JSON."""
    data = {
        "max_age": settings.max_age,
        "ignore_folders": settings.ignore_folders,
        "checked": report.entries,
        "stale": [_entry_to_dict(entry) for entry in report.stale],
        "errors": [
            {"root": failure.root, "path": failure.error.path, "error": str(failure.error.cause)}
            for failure in report.errors
        ],
    }
    console.print_json(json.dumps(data))


def _entry_to_dict(entry: EntryDescriptor) -> dict[str, object]:
    """Convert an entry to a JSON-serializable dictionary."""
    return {
        "name": entry.name,
        "path": entry.full_path,
        "size": entry.size,
        "mode": entry.mode,
        "mod_time": entry.mod_time.isoformat(),
        "is_dir": entry.is_dir,
        "age_seconds": entry.age_seconds,
    }
