"""
Key hashers for perfect-hash construction.

A hasher maps (key, entropy) to a non-negative integer. The entropy is a
32-bit signed seed folded into the hash state so that two keys colliding at
one entropy value can be separated by another.

- DefaultHasher: 31-polynomial string hash, entropy seeds the state
- XXHasher: xxh32 over the UTF-8 bytes, entropy used as the xxh32 seed
"""

from abc import ABC, abstractmethod
from typing import Union

import xxhash

from ..wrapper import wrap_functional

INT32_MASK = 0xFFFFFFFF
INT32_MAX = 2**31 - 1

# FNV 64-bit prime
FNV_PRIME_64 = 1099511628211

Key = Union[str, bytes]


def to_int32(value: int) -> int:
    """Wrap an arbitrary Python int to the signed 32-bit range."""
    value &= INT32_MASK
    if value > INT32_MAX:
        value -= 2**32
    return value


# Truncated to 32-bit signed width (== 435)
ENTROPY_PRIME = to_int32(FNV_PRIME_64)


def abs32(value: int) -> int:
    """
    Absolute value of a signed 32-bit int, saturating at INT32_MAX.

    abs(-2**31) does not fit in 32 bits, so it maps to 2**31 - 1 instead.
    """
    if value < 0:
        return INT32_MAX if value == -(2**31) else -value
    return value


def _code_units(key: Key):
    if isinstance(key, str):
        return map(ord, key)
    if isinstance(key, (bytes, bytearray, memoryview)):
        return iter(bytes(key))
    raise TypeError(f"Unsupported key type for string hashing: {type(key).__name__}")


def string_hash(key: Key) -> int:
    """Language-agnostic 31-polynomial hash (h = 31*h + unit), signed 32-bit."""
    h = 0
    for unit in _code_units(key):
        h = (31 * h + unit) & INT32_MASK
    return to_int32(h)


def default_hash(key: Key, entropy: int) -> int:
    """
    Default FNV-like hash for string keys.

    At entropy 0 this is the plain string hash, so rehashing at zero is a
    pass-through. Otherwise the state starts at the entropy and folds in the
    low byte of each code unit.

    Args:
        key: str or bytes key
        entropy: 32-bit signed seed

    Returns:
        Non-negative hash in [0, 2**31 - 1]
    """
    if entropy == 0:
        return abs32(string_hash(key))

    h = entropy & INT32_MASK
    for unit in _code_units(key):
        h = (31 * h + (unit & 0xFF)) & INT32_MASK
    return abs32(to_int32(h))


class Hasher(ABC):
    """A (key, entropy) -> non-negative int hash function."""

    @abstractmethod
    def hash(self, key, entropy: int) -> int:
        """Hash key under the given entropy."""


class DefaultHasher(Hasher):
    """Hasher for str/bytes keys backed by default_hash."""

    def hash(self, key, entropy: int) -> int:
        return default_hash(key, entropy)

    def __repr__(self) -> str:
        return "DefaultHasher()"


class XXHasher(Hasher):
    """
    Hasher for str/bytes keys backed by xxh32.

    str keys are hashed over their UTF-8 encoding. The entropy is
    reinterpreted as an unsigned 32-bit seed.
    """

    def hash(self, key, entropy: int) -> int:
        if isinstance(key, str):
            key = key.encode("utf-8")
        elif not isinstance(key, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Unsupported key type for xxh32 hashing: {type(key).__name__}"
            )
        return xxhash.xxh32_intdigest(key, seed=entropy & INT32_MASK)

    def __repr__(self) -> str:
        return "XXHasher()"


DEFAULT_HASHER = DefaultHasher()


def as_hasher(hasher=None) -> Hasher:
    """
    Normalize a hasher argument.

    Args:
        hasher: None (default hasher), a Hasher, or a plain (key, entropy) callable

    Returns:
        Hasher instance; plain callables are bound to the Hasher interface
    """
    if hasher is None:
        return DEFAULT_HASHER
    if isinstance(hasher, Hasher):
        return hasher
    if callable(hasher):
        return wrap_functional(Hasher, hasher)
    raise TypeError(f"Expected a Hasher or callable, got {hasher!r}")
