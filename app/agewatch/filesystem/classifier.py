"""Age computation and staleness policy.

Everything here is a pure function of its inputs: no filesystem
access and no clock reads.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from agewatch.filesystem.models import Classification, EntryDescriptor

logger = logging.getLogger(__name__)


def compute_age(mod_time: datetime, now: datetime) -> int:
    """Compute the age of an entry in whole seconds.

    A modification time in the future (clock skew between the host and
    a network filesystem, or a touched timestamp) is clamped to zero, so
    such entries always classify as fresh.

    Args:
        mod_time: Last modification time of the entry.
        now: Reference time of the walk.

    Returns:
        Non-negative age in seconds, truncated toward zero.
    """
    age = int((now - mod_time).total_seconds())
    if age < 0:
        logger.debug("Clamping negative age %ds (mtime %s ahead of clock)", age, mod_time)
        return 0
    return age


@dataclass(frozen=True, slots=True)
class AgePolicy:
    """Staleness policy applied to every walked entry.

    Attributes:
        max_age: Maximum allowed age in seconds. Entries strictly older are stale.
        ignore_directories: If True, directories are never stale.
    """

    max_age: int
    ignore_directories: bool = True

    def __post_init__(self) -> None:
        """Validate policy values after initialization."""
        if self.max_age < 0:
            msg = f"max_age must be non-negative, got {self.max_age}"
            raise ValueError(msg)

    def classify(self, entry: EntryDescriptor) -> Classification:
        """Classify an entry as stale or fresh.

        Args:
            entry: Descriptor produced by the tree walker.

        Returns:
            Classification.STALE if the entry is too old and not exempted,
            Classification.FRESH otherwise.
        """
        if entry.age_seconds <= self.max_age:
            return Classification.FRESH
        if entry.is_dir and self.ignore_directories:
            return Classification.FRESH
        return Classification.STALE
