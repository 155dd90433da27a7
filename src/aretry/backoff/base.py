r"""Abstract base class for delay functions."""

from __future__ import annotations

__all__ = ["BaseDelay", "DelayFunction", "fresh_delay"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Callable

DelayFunction = Union["BaseDelay", "Callable[[int], float]"]


class BaseDelay(ABC):
    """Abstract base class for delay functions.

    A delay function maps an attempt number to the number of seconds to
    wait before the next attempt. Instances are callable, so they can be
    used anywhere a plain ``attempt -> seconds`` function is accepted.
    """

    def __call__(self, attempt: int) -> float:
        return self.calculate(attempt)

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the delay after a failed attempt.

        Args:
            attempt: The attempt that just failed (1-indexed). For example,
                attempt=1 is the first attempt, attempt=2 is the first retry.

        Returns:
            The delay in seconds before the next attempt.
        """

    def fresh(self) -> BaseDelay:
        """Return a delay function with its own internal state.

        Stateless delays return themselves. Stateful delays return a new
        instance so that independent retry sequences never share state.
        """
        return self


def fresh_delay(delay: DelayFunction) -> DelayFunction:
    """Return a fresh copy of ``delay`` if it is a ``BaseDelay``.

    Plain functions are returned unchanged.
    """
    if isinstance(delay, BaseDelay):
        return delay.fresh()
    return delay
