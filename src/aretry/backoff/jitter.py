r"""Random jitter added on top of another delay function."""

from __future__ import annotations

__all__ = ["JitterRange", "RandomDelays", "random_delays"]

import random
from typing import TYPE_CHECKING, Union

from aretry.backoff.base import BaseDelay, fresh_delay
from aretry.core.validation import validate_jitter_range

if TYPE_CHECKING:
    from collections.abc import Sequence

    from aretry.backoff.base import DelayFunction

JitterRange = Union[float, "Sequence[float]"]


class RandomDelays(BaseDelay):
    """Add uniformly distributed jitter to an underlying delay.

    The jitter is drawn from ``[0, r)`` when ``jitter`` is a scalar ``r``
    and from ``[lo, hi)`` when it is a pair ``(lo, hi)``. Without an
    underlying delay function the result is the jitter alone.

    Args:
        jitter: The jitter range, a scalar or a ``(lo, hi)`` pair.
        underlying: Optional delay function whose result is jittered.

    Raises:
        ConfigurationError: If the range is negative, empty or not a scalar or pair.

    Example:
        ```pycon
        >>> from aretry.backoff import RandomDelays, fixed_delay
        >>> backoff = RandomDelays((0.5, 1.5), fixed_delay(10))
        >>> 10.5 <= backoff.calculate(1) < 11.5
        True

        ```
    """

    def __init__(self, jitter: JitterRange, underlying: DelayFunction | None = None) -> None:
        self.low, self.high = validate_jitter_range(jitter)
        self.underlying = underlying

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(jitter=({self.low}, {self.high}), "
            f"underlying={self.underlying!r})"
        )

    def fresh(self) -> RandomDelays:
        if self.underlying is None:
            return self
        return RandomDelays((self.low, self.high), fresh_delay(self.underlying))

    def calculate(self, attempt: int) -> float:
        """Calculate the jittered delay.

        Args:
            attempt: The attempt that just failed (1-indexed).

        Returns:
            The underlying delay (or 0) plus a random value in
            ``[low, high)``.
        """
        base = self.underlying(attempt) if self.underlying is not None else 0
        return base + self.low + (self.high - self.low) * random.random()  # noqa: S311


def random_delays(jitter: JitterRange, underlying: DelayFunction | None = None) -> RandomDelays:
    r"""Return a delay function adding random jitter to ``underlying``.

    Example:
        ```pycon
        >>> from aretry.backoff import random_delays
        >>> backoff = random_delays(0.25)
        >>> 0 <= backoff(1) < 0.25
        True

        ```
    """
    return RandomDelays(jitter, underlying)
