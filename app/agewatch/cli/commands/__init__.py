"""CLI commands for agewatch.

This package contains all subcommand implementations.
"""

from agewatch.cli.commands import scan, watch

__all__ = ["scan", "watch"]
