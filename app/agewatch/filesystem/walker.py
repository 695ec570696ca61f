"""Tree walker producing entry descriptors.

Walks a single root depth-first in pre-order (a directory before its
children), using an explicit stack so tree depth is not bounded by the
interpreter recursion limit. Entries are stat'ed with lstat, so symbolic links are
reported as links and never followed. Any entry that cannot be
stat'ed or listed aborts the walk of that root.
"""

import logging
import os
import stat
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path

from agewatch.filesystem.classifier import compute_age
from agewatch.filesystem.models import EntryDescriptor

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(tz=UTC)


class TraversalError(Exception):
    """Raised when an entry cannot be stat'ed or listed during a walk.

    Attributes:
        path: Path of the entry that failed.
        cause: Underlying OS error.
    """

    def __init__(self, path: str, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot walk {path}: {cause.strerror or cause}")


def walk_tree(root: str | Path, *, clock: Clock = utc_now) -> list[EntryDescriptor]:
    """Walk a root path and describe every entry beneath it.

    The root itself is the first descriptor. Results are collected into a
    list so that a failure part-way through never leaks partial results.

    Args:
        root: Root path as configured (kept verbatim in full_path).
        clock: Time source used to compute entry ages.

    Returns:
        Descriptors in depth-first pre-order.

    Raises:
        TraversalError: If any entry cannot be stat'ed or listed.
    """
    entries = list(iter_tree(root, clock=clock))
    logger.debug("Walked %s: %d entries", root, len(entries))
    return entries


def iter_tree(root: str | Path, *, clock: Clock = utc_now) -> Iterator[EntryDescriptor]:
    """Lazily yield descriptors for a root path in depth-first pre-order.

    Args:
        root: Root path to walk.
        clock: Time source used to compute entry ages.

    Yields:
        EntryDescriptor for the root and each entry below it.

    Raises:
        TraversalError: If any entry cannot be stat'ed or listed.
    """
    root_path = os.fspath(root)
    # (path, name) pairs still to visit; the top is the next entry in pre-order
    pending = [(root_path, os.path.basename(os.path.normpath(root_path)))]

    while pending:
        path, name = pending.pop()
        try:
            st = os.lstat(path)
        except OSError as e:
            raise TraversalError(path, e) from e

        entry = _describe(path, name, st, clock())
        yield entry

        if not entry.is_dir:
            continue

        try:
            children = sorted(os.listdir(path))
        except OSError as e:
            raise TraversalError(path, e) from e

        pending.extend((os.path.join(path, child), child) for child in reversed(children))


def _describe(path: str, name: str, st: os.stat_result, now: datetime) -> EntryDescriptor:
    """Build an EntryDescriptor from an lstat result."""
    mod_time = datetime.fromtimestamp(st.st_mtime, tz=UTC)
    return EntryDescriptor(
        name=name or path,
        full_path=path,
        size=st.st_size,
        mode=stat.filemode(st.st_mode),
        mod_time=mod_time,
        is_dir=stat.S_ISDIR(st.st_mode),
        age_seconds=compute_age(mod_time, now),
    )
