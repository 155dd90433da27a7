r"""Retry strategies deciding whether and when to try again.

A strategy is any callable ``strategy(attempt, error, retry, abort)``
consulted after each failed attempt. It must eventually call exactly one
of ``retry()`` (start another attempt) or ``abort(error)`` (settle with a
terminal failure), possibly asynchronously. The classes in this module
are the built-in strategies; plain functions with the same signature
are accepted everywhere a strategy is.
"""

from __future__ import annotations

__all__ = [
    "BaseStrategy",
    "DelayStrategy",
    "ImmediateStrategy",
    "MaxTriesStrategy",
    "Strategy",
    "bind_strategy",
    "delay",
    "immediate",
    "max_tries",
]

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from aretry.backoff.base import fresh_delay
from aretry.core.validation import validate_callable, validate_tries
from aretry.scheduling import resolve_scheduler

if TYPE_CHECKING:
    from aretry.backoff.base import DelayFunction
    from aretry.scheduling import Scheduler

logger: logging.Logger = logging.getLogger(__name__)

Strategy = Callable[[int, Any, Callable[[], Any], Callable[[Any], Any]], Any]


class BaseStrategy(ABC):
    """Abstract base class for the built-in strategies.

    Args:
        scheduler: Optional scheduler used to defer retries. When omitted,
            the retrier's scheduler is bound before each retry sequence,
            or the scheduler is resolved when the decision is made.
    """

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self.scheduler = scheduler

    @abstractmethod
    def __call__(
        self,
        attempt: int,
        error: Any,
        retry: Callable[[], Any],
        abort: Callable[[Any], Any],
    ) -> None:
        """Decide what to do after a failed attempt.

        Args:
            attempt: The attempt that just failed (1-indexed).
            error: The failure reported by the attempt.
            retry: Callback starting another attempt.
            abort: Callback settling the retrier with a terminal failure.
        """

    def bind(self, scheduler: Scheduler) -> BaseStrategy:
        """Return an independent copy for one retry sequence.

        The copy uses ``scheduler`` unless a scheduler was injected
        explicitly, and does not share mutable state with this instance.

        Args:
            scheduler: The scheduler of the retry sequence.

        Returns:
            The bound copy.
        """
        bound = copy.copy(self)
        if bound.scheduler is None:
            bound.scheduler = scheduler
        return bound

    def _schedule(self, seconds: float, callback: Callable[[], Any]) -> None:
        scheduler = resolve_scheduler(self.scheduler)
        if seconds <= 0:
            scheduler.call_soon(callback)
        else:
            scheduler.call_later(seconds, callback)


class ImmediateStrategy(BaseStrategy):
    """Always retry, on the next scheduling tick.

    The retry is never invoked synchronously, so rapid consecutive
    failures cannot grow the stack.

    Example:
        ```pycon
        >>> from aretry.retry.strategy import ImmediateStrategy
        >>> ImmediateStrategy()
        ImmediateStrategy()

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def __call__(
        self,
        attempt: int,
        error: Any,
        retry: Callable[[], Any],
        abort: Callable[[Any], Any],
    ) -> None:
        self._schedule(0, retry)


class DelayStrategy(BaseStrategy):
    """Lift a delay function into a strategy.

    After attempt ``n`` fails, the next attempt is scheduled
    ``delay_fn(n)`` seconds later. A delay lower than or equal to 0 is
    scheduled on the next tick instead of a zero-duration timer.

    Args:
        delay_fn: A delay function mapping the failed attempt number to
            seconds. Exceptions it raises propagate to the retrier, which
            settles with them as the terminal failure.
        scheduler: Optional scheduler used to defer retries.

    Example:
        ```pycon
        >>> from aretry.backoff import exponential_delays
        >>> from aretry.retry.strategy import DelayStrategy
        >>> DelayStrategy(exponential_delays(0.5))
        DelayStrategy(delay_fn=ExponentialDelays(base=0.5, multiplier=2))

        ```
    """

    def __init__(self, delay_fn: DelayFunction, scheduler: Scheduler | None = None) -> None:
        super().__init__(scheduler)
        validate_callable("delay_fn", delay_fn)
        self.delay_fn = delay_fn

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay_fn={self.delay_fn!r})"

    def bind(self, scheduler: Scheduler) -> DelayStrategy:
        if self.scheduler is not None:
            scheduler = self.scheduler
        return DelayStrategy(fresh_delay(self.delay_fn), scheduler)

    def __call__(
        self,
        attempt: int,
        error: Any,
        retry: Callable[[], Any],
        abort: Callable[[Any], Any],
    ) -> None:
        seconds = self.delay_fn(attempt)
        logger.debug(f"Attempt {attempt} failed, retrying in {seconds:.2f}s")
        self._schedule(seconds, retry)


class MaxTriesStrategy(BaseStrategy):
    """Give up once a maximum number of attempts was reached.

    When ``attempt >= tries`` the retrier is aborted with the last error
    unchanged. Otherwise the decision is delegated to ``inner``, or the
    next attempt is started on the next tick when there is no inner
    strategy.

    Args:
        tries: The maximum number of attempts. Must be >= 1.
        inner: Optional strategy consulted while attempts remain.
        scheduler: Optional scheduler used to defer retries.

    Raises:
        ConfigurationError: If ``tries`` is not an integer >= 1.

    Example:
        ```pycon
        >>> from aretry.retry.strategy import MaxTriesStrategy
        >>> strategy = MaxTriesStrategy(3)
        >>> strategy(3, "boom", retry=lambda: None, abort=print)
        boom

        ```
    """

    def __init__(
        self,
        tries: int,
        inner: Strategy | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        super().__init__(scheduler)
        validate_tries(tries)
        if inner is not None:
            validate_callable("inner", inner)
        self.tries = tries
        self.inner = inner

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(tries={self.tries}, inner={self.inner!r})"

    def bind(self, scheduler: Scheduler) -> MaxTriesStrategy:
        if self.scheduler is not None:
            scheduler = self.scheduler
        return MaxTriesStrategy(self.tries, bind_strategy(self.inner, scheduler), scheduler)

    def __call__(
        self,
        attempt: int,
        error: Any,
        retry: Callable[[], Any],
        abort: Callable[[Any], Any],
    ) -> None:
        if attempt >= self.tries:
            logger.debug(f"Giving up after {attempt} attempts (tries={self.tries})")
            abort(error)
        elif self.inner is not None:
            self.inner(attempt, error, retry, abort)
        else:
            self._schedule(0, retry)


def bind_strategy(strategy: Strategy | None, scheduler: Scheduler) -> Strategy | None:
    """Bind ``strategy`` to ``scheduler`` if it is a built-in strategy.

    Plain callables are returned unchanged.
    """
    if isinstance(strategy, BaseStrategy):
        return strategy.bind(scheduler)
    return strategy


def immediate(scheduler: Scheduler | None = None) -> ImmediateStrategy:
    r"""Return a strategy retrying on the next tick, forever."""
    return ImmediateStrategy(scheduler)


def delay(delay_fn: DelayFunction, scheduler: Scheduler | None = None) -> DelayStrategy:
    r"""Return a strategy waiting ``delay_fn(attempt)`` seconds between
    attempts.

    Example:
        ```pycon
        >>> from aretry.backoff import fibonacci_delays
        >>> from aretry.retry.strategy import delay
        >>> delay(fibonacci_delays(0))
        DelayStrategy(delay_fn=FibonacciDelays(start=0))

        ```
    """
    return DelayStrategy(delay_fn, scheduler)


def max_tries(
    tries: int,
    inner: Strategy | None = None,
    scheduler: Scheduler | None = None,
) -> MaxTriesStrategy:
    r"""Return a strategy aborting after ``tries`` attempts.

    Example:
        ```pycon
        >>> from aretry.backoff import fixed_delay
        >>> from aretry.retry.strategy import delay, max_tries
        >>> max_tries(5, delay(fixed_delay(1)))
        MaxTriesStrategy(tries=5, inner=DelayStrategy(delay_fn=SpecifiedDelays(delays=[1])))

        ```
    """
    return MaxTriesStrategy(tries, inner, scheduler)
