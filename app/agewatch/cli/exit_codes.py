"""Process exit codes used by the agewatch CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit statuses, one per fatal condition.

    Attributes:
        OK: Normal completion (scan with nothing stale, --version).
        INTERRUPTED: Terminated by SIGINT/SIGTERM.
        USAGE: Invalid option value, config file or settings.
        NO_DIRECTORIES: No root directory configured.
        TRAVERSAL: A root could not be walked.
        INVALID_LEVEL: Invalid severity name for log or notify level.
    """

    OK = 0
    INTERRUPTED = 1
    USAGE = 2
    NO_DIRECTORIES = 3
    TRAVERSAL = 4
    INVALID_LEVEL = 99


# scan found at least one stale entry; shares its value with INTERRUPTED
STALE_FOUND = 1
