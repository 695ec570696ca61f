"""CLI package for agewatch.

This package contains the Typer application and all subcommands.
"""

from agewatch.cli.main import app

__all__ = ["app"]
