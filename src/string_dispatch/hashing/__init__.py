"""
Key hashing for perfect-hash construction.

Provides the default 31-polynomial string hasher and an xxh32-based
alternative, plus the 32-bit arithmetic helpers both rely on.
"""

from .hasher import (
    DEFAULT_HASHER,
    ENTROPY_PRIME,
    DefaultHasher,
    Hasher,
    XXHasher,
    abs32,
    as_hasher,
    default_hash,
    string_hash,
    to_int32,
)

__all__ = [
    "Hasher",
    "DefaultHasher",
    "XXHasher",
    "DEFAULT_HASHER",
    "as_hasher",
    "default_hash",
    "string_hash",
    "abs32",
    "to_int32",
    "ENTROPY_PRIME",
]
