"""
Minimal perfect hashing for string-keyed dispatch.

Builds a recursive level tree over a key set and lowers it into a single
lookup callable mapping each key to a distinct index.
"""

from .builder import BucketBuilder, BuildStats, IndexAllocator
from .dispatcher import MISS, Dispatcher, assemble, minimal_perfect_hash
from .level import EMPTY, Empty, Leaf, Level, LinearScan, SubLevel

__all__ = [
    "minimal_perfect_hash",
    "Dispatcher",
    "MISS",
    "assemble",
    "BucketBuilder",
    "BuildStats",
    "IndexAllocator",
    "Level",
    "Empty",
    "EMPTY",
    "Leaf",
    "SubLevel",
    "LinearScan",
]
