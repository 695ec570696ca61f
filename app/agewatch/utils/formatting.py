"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from agewatch.filesystem.models import EntryDescriptor

_THEME = Theme(
    {
        "text": "#ffffff",
        "muted": "#b2bec3",
        "border": "#29526d",
        "bold_header": "bold #69B9A1",
        "success": "#03b971",
        "warning": "#f5b332",
        "error": "bold #f53263",
        "info": "#0ec1c8",
    }
)


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances
console = Console(theme=_THEME, color_system=_detect_color_system())
err_console = Console(theme=_THEME, stderr=True, color_system=_detect_color_system())


def create_entries_table(entries: list[EntryDescriptor], title: str = "Stale Entries") -> Table:
    """Create a table listing walked entries.

    Args:
        entries: Entries to display, in walk order.
        title: Table title.

    Returns:
        Rich Table with Path, Type, Mode, Modified and Age columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Type", width=9)
    table.add_column("Mode", style="muted", width=10)
    table.add_column("Modified", style="muted")
    table.add_column("Age", style="warning", justify="right")

    for entry in entries:
        table.add_row(
            entry.full_path,
            "directory" if entry.is_dir else "file",
            entry.mode,
            entry.mod_time.strftime("%Y-%m-%d %H:%M:%S"),
            format_age(entry.age_seconds),
        )
    return table


def format_age(seconds: int) -> str:
    """Format an age in seconds as a compact human-readable string.

    Examples: "45s", "30m 0s", "2h 5m", "3d 4h".
    """
    if seconds < 60:
        return f"{seconds}s"
    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    if hours < 24:
        return f"{hours}h {minutes}m"
    days, hours = divmod(hours, 24)
    return f"{days}d {hours}h"


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
