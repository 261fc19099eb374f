"""
string-dispatch: minimal perfect hashing for string-keyed dispatch.
"""

from .config import DispatchConfig, get_config, reset_config
from .errors import (
    BadHasherError,
    DispatchInvariantError,
    DuplicateKeyError,
    InvalidConfigError,
    PerfectHashError,
    ReseedExhaustedError,
)
from .hashing import DefaultHasher, Hasher, XXHasher
from .mph import MISS, Dispatcher, minimal_perfect_hash
from .switch import StringSwitch
from .wrapper import wrap_functional

__all__ = [
    "minimal_perfect_hash",
    "Dispatcher",
    "MISS",
    "StringSwitch",
    "Hasher",
    "DefaultHasher",
    "XXHasher",
    "wrap_functional",
    "DispatchConfig",
    "get_config",
    "reset_config",
    "PerfectHashError",
    "BadHasherError",
    "DuplicateKeyError",
    "ReseedExhaustedError",
    "InvalidConfigError",
    "DispatchInvariantError",
]
