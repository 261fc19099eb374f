"""Tests for dispatcher configuration."""

import logging

import pytest

from string_dispatch import ReseedExhaustedError, minimal_perfect_hash
from string_dispatch.config import (
    DEFAULT_MAX_RESEED,
    DispatchConfig,
    configure_logging,
    get_config,
    load_config,
    reset_config,
)
from string_dispatch.errors import InvalidConfigError
from string_dispatch.hashing import ENTROPY_PRIME


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Reset the global config around each test."""
    for name in ("MPH_LOAD_FACTOR", "MPH_ENTROPY_PRIME", "MPH_MAX_RESEED", "MPH_ON_EXHAUSTION"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


def test_defaults():
    """Test default configuration values."""
    config = get_config()

    assert config.load_factor == 0.75
    assert config.entropy_prime == ENTROPY_PRIME
    assert config.max_reseed == DEFAULT_MAX_RESEED
    assert config.on_exhaustion == "linear_scan"
    assert config.log_level == "INFO"


def test_global_instance_is_cached():
    assert get_config() is get_config()


def test_env_override(monkeypatch):
    """Test options are read from MPH_ environment variables."""
    monkeypatch.setenv("MPH_LOAD_FACTOR", "0.5")
    monkeypatch.setenv("MPH_ON_EXHAUSTION", "raise")
    reset_config()

    config = get_config()

    assert config.load_factor == 0.5
    assert config.on_exhaustion == "raise"


def test_invalid_env(monkeypatch):
    monkeypatch.setenv("MPH_LOAD_FACTOR", "2.0")
    reset_config()

    with pytest.raises(InvalidConfigError):
        get_config()


def test_entropy_prime_truncated():
    """Test the entropy prime is truncated to int32."""
    assert load_config(entropy_prime=1099511628211).entropy_prime == 435


@pytest.mark.parametrize(
    "overrides",
    [
        {"load_factor": 0},
        {"load_factor": 1.01},
        {"entropy_prime": 2**32},
        {"max_reseed": -1},
        {"on_exhaustion": "ignore"},
    ],
)
def test_invalid_overrides(overrides):
    with pytest.raises(InvalidConfigError):
        get_config().with_overrides(**overrides)


def test_with_overrides_returns_copy():
    base = DispatchConfig()
    changed = base.with_overrides(load_factor=0.5, max_reseed=None)

    assert changed.load_factor == 0.5
    assert changed.max_reseed is None
    assert base.load_factor == 0.75


def test_config_argument_is_used():
    """Test an explicit config drives construction."""
    config = load_config(max_reseed=0, on_exhaustion="raise")

    with pytest.raises(ReseedExhaustedError):
        minimal_perfect_hash({"x", "y"}, lambda key, entropy: 1, config=config)


def test_configure_logging():
    configure_logging(load_config(log_level="debug"))

    assert logging.getLogger("string_dispatch").level == logging.DEBUG

    logging.getLogger("string_dispatch").setLevel(logging.NOTSET)
