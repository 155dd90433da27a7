r"""Unit tests for RandomDelays."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from aretry.backoff import fibonacci_delays, fixed_delay
from aretry.backoff.jitter import RandomDelays, random_delays
from aretry.exceptions import ConfigurationError

SAMPLES = 1000


def test_random_delays_scalar_range() -> None:
    """Test a scalar range draws from [0, r)."""
    backoff = RandomDelays(0.5)
    values = [backoff.calculate(1) for _ in range(SAMPLES)]
    assert all(0 <= value < 0.5 for value in values)
    assert len(set(values)) > 1


def test_random_delays_pair_range() -> None:
    """Test a pair draws from [lo, hi)."""
    backoff = RandomDelays((2, 3))
    assert all(2 <= backoff.calculate(attempt) < 3 for attempt in range(1, SAMPLES))


def test_random_delays_list_range() -> None:
    """Test the pair may be given as a list."""
    backoff = RandomDelays([1, 1.5])
    assert backoff.low == 1
    assert backoff.high == 1.5


def test_random_delays_underlying() -> None:
    """Test the jitter is added on top of the underlying delay."""
    backoff = RandomDelays((0.5, 1.5), fixed_delay(10))
    assert all(10.5 <= backoff.calculate(1) < 11.5 for _ in range(SAMPLES))


@patch("aretry.backoff.jitter.random.random", return_value=0.5)
def test_random_delays_uses_random(mock_random) -> None:
    """Test the jitter is interpolated with random.random."""
    assert RandomDelays((1, 3), fixed_delay(4)).calculate(1) == 6.0
    mock_random.assert_called_once_with()


@patch("aretry.backoff.jitter.random.random", return_value=0.0)
def test_random_delays_lower_bound_inclusive(mock_random) -> None:  # noqa: ARG001
    """Test the lower bound can be returned."""
    assert RandomDelays((1, 3)).calculate(1) == 1


def test_random_delays_fresh_without_underlying() -> None:
    """Test a pure jitter function is stateless."""
    backoff = RandomDelays(1)
    assert backoff.fresh() is backoff


def test_random_delays_fresh_with_stateful_underlying() -> None:
    """Test fresh also refreshes the underlying delay function."""
    backoff = RandomDelays((0, 0.001), fibonacci_delays())
    for attempt in range(1, 5):
        backoff.calculate(attempt)
    copy = backoff.fresh()
    assert copy is not backoff
    assert copy.underlying is not backoff.underlying
    assert 1 <= copy.calculate(1) < 1.001


@pytest.mark.parametrize("jitter", [0, -1, (1, 1), (2, 1), (-1, 1), (1, 2, 3), "1", None])
def test_random_delays_invalid_range(jitter: object) -> None:
    """Test invalid ranges raise ConfigurationError."""
    with pytest.raises(ConfigurationError, match=r"jitter range must"):
        RandomDelays(jitter)


def test_random_delays_function() -> None:
    """Test random_delays returns a RandomDelays."""
    backoff = random_delays(0.25)
    assert isinstance(backoff, RandomDelays)
    assert backoff.underlying is None
    assert 0 <= backoff(1) < 0.25
