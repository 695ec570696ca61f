"""Filesystem domain models for age monitoring.

This module defines the core data structures for representing
filesystem entries discovered during a walk and the outcome of
checking their age against the staleness policy.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Classification(str, Enum):
    """Outcome of checking an entry against the age policy.

    Attributes:
        STALE: Entry is older than the threshold and not exempted.
        FRESH: Entry is within the threshold or exempted.
    """

    STALE = "stale"
    FRESH = "fresh"


@dataclass(frozen=True, slots=True)
class EntryDescriptor:
    """Represents a filesystem entry observed during one walk.

    Descriptors are created by the tree walker and discarded once
    the cycle that produced them has been classified and emitted.

    Attributes:
        name: Base name of the entry.
        full_path: Root path as passed to the walker joined with the
            traversal segments leading to this entry.
        size: Size in bytes as reported by lstat.
        mode: Permission/type string (e.g. "-rw-r--r--", "drwxr-xr-x").
        mod_time: Last modification time (timezone-aware, UTC).
        is_dir: True if the entry is a directory.
        age_seconds: Seconds between the walk time and mod_time, truncated.
    """

    name: str
    full_path: str
    size: int
    mode: str
    mod_time: datetime
    is_dir: bool
    age_seconds: int

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.full_path:
            msg = "Entry path cannot be empty"
            raise ValueError(msg)
        if self.age_seconds < 0:
            msg = f"Entry age cannot be negative, got {self.age_seconds}"
            raise ValueError(msg)

    @property
    def event_fields(self) -> dict[str, object]:
        """Structured fields attached to every event about this entry."""
        return {
            "filename": self.full_path,
            "mode": self.mode,
            "ModTime": self.mod_time.isoformat(),
        }
