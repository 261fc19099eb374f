"""
Level tree produced by the bucket builder.

Each level records the entropy it was hashed with, its table size and one
slot per bucket. A slot is one of:

- Empty: no key hashed here
- Leaf: exactly one key, with its assigned index
- SubLevel: several keys, resolved by a nested level
- LinearScan: keys the builder could not split within its reseed cap
"""

from dataclasses import dataclass
from typing import Any, Iterator, Union


@dataclass(frozen=True)
class Empty:
    """Slot with no keys."""


EMPTY = Empty()


@dataclass(frozen=True)
class Leaf:
    """Slot holding a single key and its assigned index."""

    key: Any
    index: int


@dataclass(frozen=True)
class LinearScan:
    """
    Terminal holding keys that never separated.

    Attributes:
        entries: (key, index) pairs, compared in order on lookup
    """

    entries: tuple[tuple[Any, int], ...]

    def iter_terminals(self) -> Iterator[tuple[Any, int]]:
        return iter(self.entries)

    def depth(self) -> int:
        return 1


@dataclass(frozen=True)
class SubLevel:
    """Slot whose colliding keys are resolved by a child level."""

    child: Union["Level", LinearScan]


Slot = Union[Empty, Leaf, SubLevel]


@dataclass(frozen=True)
class Level:
    """
    One hashing level of the dispatcher.

    Attributes:
        entropy: Entropy the keys of this level were hashed with
        size: Table size m; keys land in slot hash % m
        slots: One entry per slot, len(slots) == size
    """

    entropy: int
    size: int
    slots: tuple[Slot, ...]

    def iter_terminals(self) -> Iterator[tuple[Any, int]]:
        """Yield every (key, index) pair reachable from this level."""
        for slot in self.slots:
            if isinstance(slot, Leaf):
                yield slot.key, slot.index
            elif isinstance(slot, SubLevel):
                yield from slot.child.iter_terminals()

    def depth(self) -> int:
        """Number of levels on the longest path from here (this level counts 1)."""
        deepest = 0
        for slot in self.slots:
            if isinstance(slot, SubLevel):
                deepest = max(deepest, slot.child.depth())
        return 1 + deepest
