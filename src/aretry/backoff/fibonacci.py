r"""Fibonacci delay strategy."""

from __future__ import annotations

__all__ = ["FibonacciDelays", "fibonacci_delays"]

from aretry.backoff.base import BaseDelay
from aretry.core.validation import validate_non_negative


class FibonacciDelays(BaseDelay):
    """Fibonacci delay strategy.

    Produces ``start, start, 2*start, 3*start, 5*start, ...``. With
    ``start=0`` the sequence is the classic ``0, 1, 1, 2, 3, 5, ...``.

    The sequence is generated from two running values that advance once
    per distinct attempt. Attempts must therefore be queried in
    increasing, consecutive order, which is how the retry loop queries
    them. Use ``fresh()`` (or ``reset()``) to restart the sequence for an
    independent retry sequence.

    Args:
        start: The first delay in seconds (default: 1).

    Raises:
        ConfigurationError: If ``start`` is negative.

    Example:
        ```pycon
        >>> from aretry.backoff import FibonacciDelays
        >>> backoff = FibonacciDelays(start=2)
        >>> [backoff.calculate(attempt) for attempt in range(1, 8)]
        [2, 2, 4, 6, 10, 16, 26]
        >>> backoff = FibonacciDelays(start=0)
        >>> [backoff.calculate(attempt) for attempt in range(1, 9)]
        [0, 1, 1, 2, 3, 5, 8, 13]

        ```
    """

    def __init__(self, start: float = 1) -> None:
        validate_non_negative("start", start)
        self.start = start
        self.reset()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(start={self.start})"

    def reset(self) -> None:
        """Restart the sequence from its first term."""
        self._current = self.start
        self._next = self.start if self.start else 1
        self._last_attempt: int | None = None
        self._last_delay = self.start

    def fresh(self) -> FibonacciDelays:
        return FibonacciDelays(start=self.start)

    def calculate(self, attempt: int) -> float:
        """Return the next term of the sequence.

        Args:
            attempt: The attempt that just failed (1-indexed). Querying the
                same attempt twice in a row returns the same delay.

        Returns:
            The delay in seconds.
        """
        if attempt == self._last_attempt:
            return self._last_delay
        delay = self._current
        self._current, self._next = self._next, self._current + self._next
        self._last_attempt = attempt
        self._last_delay = delay
        return delay


def fibonacci_delays(start: float = 1) -> FibonacciDelays:
    r"""Return a Fibonacci delay function.

    Example:
        ```pycon
        >>> from aretry.backoff import fibonacci_delays
        >>> backoff = fibonacci_delays()
        >>> [backoff(attempt) for attempt in range(1, 8)]
        [1, 1, 2, 3, 5, 8, 13]

        ```
    """
    return FibonacciDelays(start=start)
