"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from agewatch import __version__
from agewatch.cli.commands import scan, watch

# Create main Typer app
app = typer.Typer(
    name="agewatch",
    help="Poll directories for files that are older than a given max age.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"agewatch version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """agewatch - poll directories for stuck and stale files.

    All options can also be set via environment variables with the same
    name in capitals (POLL=60 MAXAGE=1800 DIRECTORY=/watch), or in a
    config file with one 'name value' pair per line.
    """


# Register commands
app.command(name="watch")(watch.watch)
app.command(name="scan")(scan.scan)


if __name__ == "__main__":
    app()
