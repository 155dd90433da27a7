r"""Exponential delay strategy."""

from __future__ import annotations

__all__ = ["ExponentialDelays", "exponential_delays"]

import math

from aretry.backoff.base import BaseDelay
from aretry.core.validation import validate_non_negative


class ExponentialDelays(BaseDelay):
    """Exponential delay strategy.

    Calculates delay as: base * max(multiplier ** (attempt - 1), 1).

    The growth factor is floored at 1, so a multiplier of 0 or 1 yields a
    constant delay equal to ``base`` instead of shrinking or vanishing
    delays. A ``base`` of 0 always yields 0. Delays too large for a float
    are reported as ``math.inf``, which a ``MaxDelayCap`` clamps back to
    its maximum.

    Args:
        base: The delay in seconds after the first attempt (default: 1).
        multiplier: The growth factor between consecutive delays
            (default: 2).

    Raises:
        ConfigurationError: If ``base`` or ``multiplier`` is negative.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialDelays
        >>> backoff = ExponentialDelays(base=3, multiplier=3)
        >>> [backoff.calculate(attempt) for attempt in range(1, 6)]
        [3, 9, 27, 81, 243]
        >>> backoff = ExponentialDelays(base=5, multiplier=0)
        >>> [backoff.calculate(attempt) for attempt in range(1, 4)]
        [5, 5, 5]

        ```
    """

    def __init__(self, base: float = 1, multiplier: float = 2) -> None:
        validate_non_negative("base", base)
        validate_non_negative("multiplier", multiplier)

        self.base = base
        self.multiplier = multiplier

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base={self.base}, multiplier={self.multiplier})"

    def calculate(self, attempt: int) -> float:
        """Calculate exponential delay.

        Args:
            attempt: The attempt that just failed (1-indexed).

        Returns:
            The calculated delay: base * max(multiplier ** (attempt - 1), 1),
            or ``math.inf`` once it no longer fits in a float.
        """
        if self.base == 0:
            return self.base
        try:
            return self.base * max(self.multiplier ** (attempt - 1), 1)
        except OverflowError:
            return math.inf


def exponential_delays(base: float = 1, multiplier: float = 2) -> ExponentialDelays:
    r"""Return an exponential delay function.

    Example:
        ```pycon
        >>> from aretry.backoff import exponential_delays
        >>> backoff = exponential_delays()
        >>> [backoff(attempt) for attempt in range(1, 7)]
        [1, 2, 4, 8, 16, 32]

        ```
    """
    return ExponentialDelays(base=base, multiplier=multiplier)
