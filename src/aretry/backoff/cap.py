r"""Cap applied to another delay function."""

from __future__ import annotations

__all__ = ["MaxDelayCap", "max_delay_cap"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseDelay, fresh_delay
from aretry.core.validation import validate_non_negative

if TYPE_CHECKING:
    from aretry.backoff.base import DelayFunction


class MaxDelayCap(BaseDelay):
    """Clamp the delays of an underlying delay function.

    Args:
        maximum: The largest delay in seconds that may be returned.
        underlying: The delay function to clamp.

    Raises:
        ConfigurationError: If ``maximum`` is negative.

    Example:
        ```pycon
        >>> from aretry.backoff import MaxDelayCap, exponential_delays
        >>> backoff = MaxDelayCap(5, exponential_delays())
        >>> [backoff.calculate(attempt) for attempt in range(1, 6)]
        [1, 2, 4, 5, 5]

        ```
    """

    def __init__(self, maximum: float, underlying: DelayFunction) -> None:
        validate_non_negative("maximum", maximum)
        self.maximum = maximum
        self.underlying = underlying

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(maximum={self.maximum}, "
            f"underlying={self.underlying!r})"
        )

    def fresh(self) -> MaxDelayCap:
        return MaxDelayCap(self.maximum, fresh_delay(self.underlying))

    def calculate(self, attempt: int) -> float:
        """Return the underlying delay, clamped to ``maximum``."""
        return min(self.underlying(attempt), self.maximum)


def max_delay_cap(maximum: float, underlying: DelayFunction) -> MaxDelayCap:
    r"""Return ``underlying`` capped at ``maximum`` seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import fibonacci_delays, max_delay_cap
        >>> backoff = max_delay_cap(4, fibonacci_delays())
        >>> [backoff(attempt) for attempt in range(1, 7)]
        [1, 1, 2, 3, 4, 4]

        ```
    """
    return MaxDelayCap(maximum, underlying)
