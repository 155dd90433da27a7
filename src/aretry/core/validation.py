r"""Parameter validation utilities for retry configuration.

This module provides validation functions for delay and retry parameters
to ensure they meet the required constraints before a retrier is built.
Every function raises ``ConfigurationError``, which is a ``ValueError``.
"""

from __future__ import annotations

__all__ = [
    "validate_callable",
    "validate_jitter_range",
    "validate_non_negative",
    "validate_tries",
]

from collections.abc import Sequence
from numbers import Real
from typing import Any

from aretry.exceptions import ConfigurationError


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_non_negative(name: str, value: Any) -> None:
    """Validate that ``value`` is a non-negative number.

    Args:
        name: The parameter name used in the error message.
        value: The value to validate.

    Raises:
        ConfigurationError: If ``value`` is not a number or is negative.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_non_negative
        >>> validate_non_negative("base", 0)
        >>> validate_non_negative("base", -1)
        Traceback (most recent call last):
            ...
        aretry.exceptions.ConfigurationError: base must be a non-negative number, got -1

        ```
    """
    if not _is_number(value) or value < 0:
        msg = f"{name} must be a non-negative number, got {value!r}"
        raise ConfigurationError(msg)


def validate_tries(tries: Any) -> None:
    """Validate the maximum number of attempts.

    Args:
        tries: The maximum number of attempts. Must be an integer >= 1.

    Raises:
        ConfigurationError: If ``tries`` is not an integer >= 1.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_tries
        >>> validate_tries(3)
        >>> validate_tries(0)
        Traceback (most recent call last):
            ...
        aretry.exceptions.ConfigurationError: tries must be an integer >= 1, got 0

        ```
    """
    if not isinstance(tries, int) or isinstance(tries, bool) or tries < 1:
        msg = f"tries must be an integer >= 1, got {tries!r}"
        raise ConfigurationError(msg)


def validate_jitter_range(jitter: Any) -> tuple[float, float]:
    """Validate a jitter range and normalize it to a ``(low, high)``
    pair.

    Args:
        jitter: A positive scalar ``r`` meaning ``[0, r)``, or a pair
            ``(lo, hi)`` with ``0 <= lo < hi``.

    Returns:
        The normalized ``(low, high)`` pair.

    Raises:
        ConfigurationError: If the range is malformed.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_jitter_range
        >>> validate_jitter_range(2)
        (0, 2)
        >>> validate_jitter_range([1, 3])
        (1, 3)

        ```
    """
    if _is_number(jitter):
        low, high = 0, jitter
    elif (
        isinstance(jitter, Sequence)
        and not isinstance(jitter, str)
        and len(jitter) == 2
        and all(_is_number(value) for value in jitter)
    ):
        low, high = jitter
    else:
        msg = f"jitter range must be a number or a (low, high) pair, got {jitter!r}"
        raise ConfigurationError(msg)
    if low < 0 or high <= low:
        msg = f"jitter range must satisfy 0 <= low < high, got ({low}, {high})"
        raise ConfigurationError(msg)
    return low, high


def validate_callable(name: str, value: Any) -> None:
    """Validate that ``value`` is callable.

    Raises:
        ConfigurationError: If ``value`` is not callable.
    """
    if not callable(value):
        msg = f"{name} must be callable, got {value!r}"
        raise ConfigurationError(msg)
