"""Filesystem walking and age classification.

This module provides the tree walker, the entry descriptor model,
and the staleness policy applied to every walked entry.
"""

from agewatch.filesystem.classifier import AgePolicy, compute_age
from agewatch.filesystem.models import Classification, EntryDescriptor
from agewatch.filesystem.walker import TraversalError, iter_tree, utc_now, walk_tree

__all__ = [
    "AgePolicy",
    "Classification",
    "EntryDescriptor",
    "TraversalError",
    "compute_age",
    "iter_tree",
    "utc_now",
    "walk_tree",
]
