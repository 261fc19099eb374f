"""
Configuration management for perfect-hash dispatcher construction.
"""

import logging
from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidConfigError
from .hashing import ENTROPY_PRIME, to_int32

# Reseeds tried per level before the on_exhaustion policy applies
DEFAULT_MAX_RESEED = 256


class DispatchConfig(BaseSettings):
    """Options for minimal perfect hash construction."""

    load_factor: float = Field(
        default=0.75,
        gt=0,
        le=1,
        description="Keys per slot at each level; table size is ceil(n / load_factor)",
    )
    entropy_prime: int = Field(
        default=ENTROPY_PRIME,
        description="Odd multiplier applied to the entropy on reseed (int32)",
    )
    max_reseed: Optional[int] = Field(
        default=DEFAULT_MAX_RESEED,
        ge=0,
        description="Reseeds allowed per level before giving up (None = unbounded)",
    )
    on_exhaustion: Literal["linear_scan", "raise"] = Field(
        default="linear_scan",
        description="What to do when max_reseed is reached",
    )

    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_prefix="MPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("entropy_prime")
    @classmethod
    def _truncate_and_check_prime(cls, value: int) -> int:
        value = to_int32(value)
        if value % 2 == 0:
            raise ValueError(f"entropy_prime must be odd, got {value}")
        return value

    def with_overrides(self, **overrides) -> "DispatchConfig":
        """
        Return a validated copy with the given options replaced.

        Raises:
            InvalidConfigError: If an override is out of range
        """
        data = self.model_dump()
        data.update(overrides)
        return load_config(**data)


def load_config(**values) -> DispatchConfig:
    """Build a DispatchConfig, reporting validation failures as InvalidConfigError."""
    try:
        return DispatchConfig(**values)
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid dispatcher configuration: {e}") from e


def configure_logging(config: Optional[DispatchConfig] = None) -> None:
    """Apply the configured log level to the package logger."""
    config = config or get_config()
    logging.getLogger("string_dispatch").setLevel(config.log_level.upper())


# Global config instance
_config: Optional[DispatchConfig] = None


def get_config() -> DispatchConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
