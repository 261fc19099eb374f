"""
Exceptions raised while constructing perfect-hash dispatchers.

Construction is transactional: any of these aborts the whole build and no
dispatcher is returned. Lookups never raise these, apart from
DispatchInvariantError which signals a corrupted jump table.
"""


class PerfectHashError(Exception):
    """Base class for all dispatcher construction errors."""


class BadHasherError(PerfectHashError, ValueError):
    """The hasher returned a negative (or non-integer) hash value."""

    def __init__(self, key, value, entropy: int):
        self.key = key
        self.value = value
        self.entropy = entropy
        super().__init__(
            f"Hash must be a non-negative int: {value!r}, for key: {key!r} "
            f"(entropy {entropy})"
        )


class DuplicateKeyError(PerfectHashError, ValueError):
    """Two entries of the input key set compare equal."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"Duplicate key in key set: {key!r}")


class ReseedExhaustedError(PerfectHashError, RuntimeError):
    """The reseed cap was reached without a non-degenerate distribution."""

    def __init__(self, num_keys: int, attempts: int, entropy: int):
        self.num_keys = num_keys
        self.attempts = attempts
        self.entropy = entropy
        super().__init__(
            f"Could not split {num_keys} keys after {attempts} reseeds "
            f"(last entropy {entropy})"
        )


class InvalidConfigError(PerfectHashError, ValueError):
    """A construction option is outside its valid range."""


class DispatchInvariantError(PerfectHashError, AssertionError):
    """A jump table was indexed outside its bounds."""
