"""Utility modules for agewatch."""

from agewatch.utils.formatting import (
    console,
    create_entries_table,
    err_console,
    format_age,
    print_error,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_entries_table",
    "err_console",
    "format_age",
    "print_error",
    "print_success",
    "print_warning",
]
