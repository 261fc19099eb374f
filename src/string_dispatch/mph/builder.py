"""
Recursive bucket builder for minimal perfect hashing.

Partitions a key set into ceil(n / load_factor) buckets by hash, reseeds
when every key lands in the same bucket, and descends into buckets that
still hold several keys. Terminal indices are handed out by a single
IndexAllocator shared across the whole recursion, so the indices of all
leaves form exactly {0, ..., n-1}.
"""

import logging
import math
import operator
from dataclasses import asdict, dataclass
from typing import Callable, Optional, Sequence, Union

from ..config import DEFAULT_MAX_RESEED
from ..errors import (
    BadHasherError,
    DispatchInvariantError,
    DuplicateKeyError,
    InvalidConfigError,
    ReseedExhaustedError,
)
from ..hashing import ENTROPY_PRIME, Hasher, to_int32
from .level import EMPTY, Leaf, Level, LinearScan, SubLevel

logger = logging.getLogger(__name__)

ON_EXHAUSTION_CHOICES = ("linear_scan", "raise")


class IndexAllocator:
    """
    Monotonic terminal-index counter for one construction.

    Written only while building; frozen afterwards.
    """

    def __init__(self):
        self._next_index = 0
        self._frozen = False

    def next(self) -> int:
        """Hand out the next unused index."""
        if self._frozen:
            raise RuntimeError("IndexAllocator is frozen")
        index = self._next_index
        self._next_index += 1
        return index

    def freeze(self) -> int:
        """Stop handing out indices and return how many were allocated."""
        self._frozen = True
        return self._next_index

    @property
    def count(self) -> int:
        return self._next_index

    @property
    def frozen(self) -> bool:
        return self._frozen


@dataclass
class BuildStats:
    """Shape of a built level tree."""

    num_keys: int = 0
    num_levels: int = 0
    max_depth: int = 0
    reseeds: int = 0
    linear_scans: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


class BucketBuilder:
    """
    Build a Level tree for a key set.

    Usage:
        builder = BucketBuilder(DefaultHasher())
        root, size = builder.build_root(keys)
    """

    def __init__(
        self,
        hasher: Hasher,
        load_factor: float = 0.75,
        entropy_prime: int = ENTROPY_PRIME,
        max_reseed: Optional[int] = DEFAULT_MAX_RESEED,
        on_exhaustion: str = "linear_scan",
    ):
        """
        Initialize bucket builder.

        Args:
            hasher: Hasher used at every level
            load_factor: Keys per slot, in (0, 1]
            entropy_prime: Odd multiplier applied to the entropy on reseed
            max_reseed: Reseeds allowed per level (None = unbounded)
            on_exhaustion: "linear_scan" or "raise" once max_reseed is hit
        """
        if not 0 < load_factor <= 1:
            raise InvalidConfigError(f"load_factor must be in (0, 1], got {load_factor}")
        if to_int32(entropy_prime) % 2 == 0:
            raise InvalidConfigError(f"entropy_prime must be odd, got {entropy_prime}")
        if max_reseed is not None and max_reseed < 0:
            raise InvalidConfigError(f"max_reseed must be >= 0, got {max_reseed}")
        if on_exhaustion not in ON_EXHAUSTION_CHOICES:
            raise InvalidConfigError(
                f"on_exhaustion must be one of {ON_EXHAUSTION_CHOICES}, got {on_exhaustion!r}"
            )

        self.hasher = hasher
        self.load_factor = load_factor
        self.entropy_prime = to_int32(entropy_prime)
        self.max_reseed = max_reseed
        self.on_exhaustion = on_exhaustion
        self.stats = BuildStats()

        self._hash_fn: Callable[[object, int], int] = hasher.hash

    def hash(self, key, entropy: int) -> int:
        """Hash a key, enforcing the non-negative int contract."""
        value = self._hash_fn(key, entropy)
        try:
            h = operator.index(value)
        except TypeError:
            raise BadHasherError(key, value, entropy) from None
        if h < 0:
            raise BadHasherError(key, value, entropy)
        return h

    def table_size(self, num_keys: int) -> int:
        """Slots needed for num_keys keys at this builder's load factor."""
        size = math.ceil(num_keys / self.load_factor)
        if size <= 0:
            raise InvalidConfigError(
                f"Non-positive table size {size} for {num_keys} keys "
                f"at load factor {self.load_factor}"
            )
        return size

    def reseed(self, entropy: int) -> int:
        """Next entropy to try after a degenerate distribution."""
        if entropy == 0:
            return self.entropy_prime
        return to_int32(entropy * self.entropy_prime)

    def distribute(self, keys: Sequence, size: int, entropy: int) -> list[list]:
        """Split keys into size buckets by hash(key, entropy) % size."""
        buckets: list[list] = [[] for _ in range(size)]
        for key in keys:
            buckets[self.hash(key, entropy) % size].append(key)
        return buckets

    def check_distinct(self, keys: Sequence) -> None:
        """
        Reject key sets containing equal entries.

        Keys are grouped by their hash at entropy 0 and only compared within a
        group, so keys need equality but not __hash__.

        Raises:
            DuplicateKeyError: If two keys compare equal
            BadHasherError: If the hasher returns a negative value
        """
        groups: dict[int, list] = {}
        for key in keys:
            group = groups.setdefault(self.hash(key, 0), [])
            for other in group:
                if other == key:
                    raise DuplicateKeyError(key)
            group.append(key)

    def build(
        self,
        keys: Sequence,
        entropy: int,
        allocator: IndexAllocator,
        depth: int = 1,
    ) -> Union[Level, LinearScan]:
        """
        Build one level (and, recursively, its sub-levels).

        Args:
            keys: Distinct keys for this level (at least one)
            entropy: Entropy inherited from the parent level (0 at the root)
            allocator: Shared terminal-index allocator
            depth: Depth of this level, 1 for the root

        Returns:
            The level, or a LinearScan terminal if the reseed cap was hit
        """
        self.stats.max_depth = max(self.stats.max_depth, depth)

        if len(keys) == 1:
            self.stats.num_levels += 1
            return Level(entropy, 1, (Leaf(keys[0], allocator.next()),))

        size = self.table_size(len(keys))
        attempts = 0
        while True:
            buckets = self.distribute(keys, size, entropy)
            if not _all_in_one_bucket(buckets):
                break
            if self.max_reseed is not None and attempts >= self.max_reseed:
                return self._on_exhausted(keys, attempts, entropy, allocator)
            attempts += 1
            self.stats.reseeds += 1
            previous, entropy = entropy, self.reseed(entropy)
            logger.debug(
                f"Degenerate split of {len(keys)} keys at depth {depth} "
                f"(entropy {previous}), reseeding with {entropy}"
            )

        slots = []
        for bucket in buckets:
            if not bucket:
                slots.append(EMPTY)
            elif len(bucket) == 1:
                slots.append(Leaf(bucket[0], allocator.next()))
            else:
                child = self.build(bucket, entropy, allocator, depth + 1)
                slots.append(SubLevel(child))

        self.stats.num_levels += 1
        return Level(entropy, size, tuple(slots))

    def build_root(self, keys: Sequence) -> tuple[Union[Level, LinearScan, None], int]:
        """
        Build the complete tree for a key set.

        Args:
            keys: Distinct keys (any order)

        Returns:
            Tuple of (root, number of assigned indices); root is None for an
            empty key set
        """
        keys = list(keys)
        self.stats = BuildStats(num_keys=len(keys))
        allocator = IndexAllocator()

        if not keys:
            allocator.freeze()
            return None, 0

        self.check_distinct(keys)
        root = self.build(keys, 0, allocator)
        count = allocator.freeze()

        if count != len(keys):
            raise DispatchInvariantError(
                f"Allocated {count} indices for {len(keys)} keys"
            )
        return root, count

    def _on_exhausted(
        self, keys: Sequence, attempts: int, entropy: int, allocator: IndexAllocator
    ) -> LinearScan:
        if self.on_exhaustion == "raise":
            raise ReseedExhaustedError(len(keys), attempts, entropy)

        logger.warning(
            f"Reseed cap of {attempts} reached for {len(keys)} keys "
            f"(entropy {entropy}), falling back to linear scan"
        )
        self.stats.linear_scans += 1
        return LinearScan(tuple((key, allocator.next()) for key in keys))


def _all_in_one_bucket(buckets: list[list]) -> bool:
    num_empty = sum(1 for bucket in buckets if not bucket)
    return num_empty == len(buckets) - 1
