"""
Dispatcher assembly and the minimal_perfect_hash entry point.

Lowers a Level tree into a single lookup callable. Each level becomes a
closure that hashes the key at the level's entropy, takes the hash modulo the
table size and jumps through a tuple of slot handlers:

- Empty -> miss sentinel
- Leaf -> assigned index if the key equals the saved key, else miss
- SubLevel -> the child level's lookup
- LinearScan -> index of the first equal saved key, else miss
"""

import logging
from typing import Callable, Iterable, Optional, Union

from ..config import DispatchConfig, get_config
from ..errors import DispatchInvariantError
from ..hashing import Hasher, as_hasher
from ..wrapper import wrap_functional
from .builder import BucketBuilder, BuildStats
from .level import Empty, Leaf, Level, LinearScan, SubLevel

logger = logging.getLogger(__name__)

MISS = -1

LookupFn = Callable[[object], int]

# Distinguishes "not passed" from max_reseed=None (unbounded)
_UNSET = object()


def _miss(key) -> int:
    return MISS


def _confirm(saved_key, index: int) -> LookupFn:
    def confirm(key) -> int:
        return index if key == saved_key else MISS

    return confirm


def _scan(entries: tuple) -> LookupFn:
    def scan(key) -> int:
        for saved_key, index in entries:
            if key == saved_key:
                return index
        return MISS

    return scan


def _lower_slot(slot, hasher: Hasher) -> LookupFn:
    if isinstance(slot, Empty):
        return _miss
    if isinstance(slot, Leaf):
        return _confirm(slot.key, slot.index)
    if isinstance(slot, SubLevel):
        return assemble(slot.child, hasher)
    raise DispatchInvariantError(f"Unknown slot type: {type(slot).__name__}")


def assemble(node: Union[Level, LinearScan, None], hasher: Hasher) -> LookupFn:
    """
    Lower a level tree into a lookup callable.

    Args:
        node: Root of the tree (None for an empty key set)
        hasher: Hasher the tree was built with

    Returns:
        Callable mapping a key to its index, or MISS
    """
    if node is None:
        return _miss
    if isinstance(node, LinearScan):
        return _scan(node.entries)

    hash_fn = hasher.hash
    entropy = node.entropy
    size = node.size
    table = tuple(_lower_slot(slot, hasher) for slot in node.slots)

    def lookup(key) -> int:
        h = hash_fn(key, entropy)
        # Members never hash negative at this entropy
        if h < 0:
            return MISS
        switch_index = h % size
        try:
            handler = table[switch_index]
        except IndexError:
            raise DispatchInvariantError(
                f"Switch index out of bounds: {switch_index}"
            ) from None
        return handler(key)

    return lookup


class Dispatcher:
    """
    Immutable key -> index dispatcher built by minimal_perfect_hash.

    Every key of the build set maps to a distinct index in [0, len(self));
    every other key maps to MISS (-1). Lookups are pure and safe to call from
    any number of threads.
    """

    __slots__ = ("_root", "_size", "_hasher", "_stats", "_lookup")

    def __init__(
        self,
        root: Union[Level, LinearScan, None],
        size: int,
        hasher: Hasher,
        stats: Optional[BuildStats] = None,
    ):
        self._root = root
        self._size = size
        self._hasher = hasher
        self._stats = stats or BuildStats(num_keys=size)
        self._lookup = assemble(root, hasher)

    def lookup(self, key) -> int:
        """
        Look up the index assigned to a key.

        Args:
            key: Key to look up

        Returns:
            Index in [0, len(self)) if key was in the build set, MISS otherwise
        """
        return self._lookup(key)

    def __call__(self, key) -> int:
        return self._lookup(key)

    def __contains__(self, key) -> bool:
        return self._lookup(key) != MISS

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"Dispatcher(size={self._size}, depth={self.depth}, hasher={self._hasher!r})"

    @property
    def root(self) -> Union[Level, LinearScan, None]:
        return self._root

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def stats(self) -> BuildStats:
        return self._stats

    @property
    def depth(self) -> int:
        """Number of levels on the longest lookup path (0 when empty)."""
        return 0 if self._root is None else self._root.depth()

    def keys(self) -> list:
        """Retained keys, ordered by assigned index."""
        if self._root is None:
            return []
        return [key for key, _ in sorted(self._root.iter_terminals(), key=lambda t: t[1])]

    def as_interface(self, interface: type, method_name: Optional[str] = None):
        """Bind lookup to a one-method interface (see wrap_functional)."""
        return wrap_functional(interface, self._lookup, method_name)


def minimal_perfect_hash(
    keys: Iterable,
    hasher=None,
    *,
    load_factor: Optional[float] = None,
    entropy_prime: Optional[int] = None,
    max_reseed=_UNSET,
    on_exhaustion: Optional[str] = None,
    config: Optional[DispatchConfig] = None,
) -> Dispatcher:
    """
    Build a minimal perfect hash dispatcher for a key set.

    Options left unset are taken from config (or the global config).

    Args:
        keys: Distinct keys; str/bytes for the default hasher
        hasher: Hasher instance or (key, entropy) -> int callable
        load_factor: Keys per slot, in (0, 1]
        entropy_prime: Odd multiplier applied to the entropy on reseed
        max_reseed: Reseeds allowed per level (None = unbounded)
        on_exhaustion: "linear_scan" or "raise" once max_reseed is hit
        config: Base configuration

    Returns:
        Dispatcher mapping each key to a distinct index in [0, len(keys))

    Raises:
        DuplicateKeyError: If two keys compare equal
        BadHasherError: If the hasher returns a negative value
        ReseedExhaustedError: If the reseed cap is hit with on_exhaustion="raise"
        InvalidConfigError: If an option is out of range
    """
    overrides = {
        name: value
        for name, value in (
            ("load_factor", load_factor),
            ("entropy_prime", entropy_prime),
            ("on_exhaustion", on_exhaustion),
        )
        if value is not None
    }
    if max_reseed is not _UNSET:
        overrides["max_reseed"] = max_reseed
    config = (config or get_config()).with_overrides(**overrides)
    hasher = as_hasher(hasher)
    keys = list(keys)

    logger.info(
        f"Building minimal perfect hash for {len(keys)} keys "
        f"(load factor {config.load_factor}, hasher {hasher!r})"
    )

    builder = BucketBuilder(
        hasher,
        load_factor=config.load_factor,
        entropy_prime=config.entropy_prime,
        max_reseed=config.max_reseed,
        on_exhaustion=config.on_exhaustion,
    )
    root, size = builder.build_root(keys)
    dispatcher = Dispatcher(root, size, hasher, builder.stats)

    stats = builder.stats
    logger.info(
        f"Built dispatcher: {size} keys, {stats.num_levels} levels, "
        f"depth {stats.max_depth}, {stats.reseeds} reseeds"
    )
    if stats.linear_scans > 0:
        logger.warning(f"{stats.linear_scans} level(s) fell back to linear scan")

    return dispatcher
