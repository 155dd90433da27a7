r"""Fixed and explicitly specified delays."""

from __future__ import annotations

__all__ = ["SpecifiedDelays", "fixed_delay", "specified_delays"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseDelay
from aretry.core.validation import validate_non_negative
from aretry.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


class SpecifiedDelays(BaseDelay):
    """Delay strategy replaying an explicit list of delays.

    Attempt ``i`` waits ``delays[i - 1]`` seconds. Once the list is
    exhausted the last value is repeated indefinitely.

    Args:
        delays: The delays in seconds. Must be non-empty and every value
            must be non-negative.

    Raises:
        ConfigurationError: If ``delays`` is empty or contains a negative value.

    Example:
        ```pycon
        >>> from aretry.backoff import SpecifiedDelays
        >>> backoff = SpecifiedDelays([1, 9, 2])
        >>> [backoff.calculate(attempt) for attempt in range(1, 6)]
        [1, 9, 2, 2, 2]

        ```
    """

    def __init__(self, delays: Sequence[float]) -> None:
        delays = tuple(delays)
        if not delays:
            msg = "delays must contain at least one value"
            raise ConfigurationError(msg)
        for value in delays:
            validate_non_negative("delay", value)
        self.delays = delays

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delays={list(self.delays)})"

    def calculate(self, attempt: int) -> float:
        """Return the delay configured for ``attempt``.

        Args:
            attempt: The attempt that just failed (1-indexed).

        Returns:
            ``delays[attempt - 1]``, or the last delay past the end of the
            list.
        """
        index = min(max(attempt, 1), len(self.delays)) - 1
        return self.delays[index]


def specified_delays(delays: Sequence[float]) -> SpecifiedDelays:
    r"""Return a delay function replaying ``delays`` then repeating the
    last value.

    Example:
        ```pycon
        >>> from aretry.backoff import specified_delays
        >>> backoff = specified_delays([1, 9, 2, 8, 3])
        >>> [backoff(attempt) for attempt in range(1, 10)]
        [1, 9, 2, 8, 3, 3, 3, 3, 3]

        ```
    """
    return SpecifiedDelays(delays)


def fixed_delay(delay: float) -> SpecifiedDelays:
    r"""Return a delay function that always waits ``delay`` seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import fixed_delay
        >>> backoff = fixed_delay(2.5)
        >>> backoff(1), backoff(10)
        (2.5, 2.5)

        ```
    """
    return SpecifiedDelays([delay])
