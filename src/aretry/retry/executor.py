r"""Attempt loop driving one retry sequence.

This module provides the RetryExecution class that repeatedly invokes an
operation through an input adapter, consults the strategy after each
failure and reports the outcome exactly once through a settlement.
"""

from __future__ import annotations

__all__ = ["RetryExecution"]

import logging
import time
from functools import partial
from typing import TYPE_CHECKING, Any

from aretry.settlement import Settlement

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.conventions.base import InputAdapter
    from aretry.retry.manager import CallbackManager
    from aretry.retry.strategy import Strategy

logger: logging.Logger = logging.getLogger(__name__)

_LAST_ERROR = object()


class RetryExecution:
    """State of a single invocation of a retrier.

    The execution owns its attempt counter, its strategy instance and its
    settlement, so independent invocations never share state.

    Attempts are strictly sequential: attempt ``n + 1`` starts only after
    the strategy decided to continue following the failure of attempt
    ``n``. Each attempt reports through its own one-shot latch, so an
    operation completing twice is only heard once, and each failure is
    decided through a one-shot latch shared by ``retry`` and ``abort``, so
    a strategy calling back more than once cannot start concurrent
    attempts. Once settled, pending retries are inert.

    Args:
        operation: The operation to retry.
        args: Positional arguments of the operation.
        kwargs: Keyword arguments of the operation.
        invoker: Input adapter invoking the operation.
        strategy: Strategy consulted after each failure.
        settlement: Settlement reporting the outcome to the caller.
        callbacks: Manager for lifecycle callbacks.

    Attributes:
        attempts: Number of attempts started so far.
    """

    def __init__(
        self,
        operation: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        invoker: InputAdapter,
        strategy: Strategy,
        settlement: Settlement,
        callbacks: CallbackManager,
    ) -> None:
        self.operation = operation
        self.args = args
        self.kwargs = kwargs
        self.invoker = invoker
        self.strategy = strategy
        self.settlement = settlement
        self.callbacks = callbacks
        self.attempts = 0
        self.start_time = time.time()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(attempts={self.attempts}, "
            f"finished={self.settlement.finished})"
        )

    def start(self) -> None:
        """Start the first attempt."""
        self._attempt()

    def _attempt(self) -> None:
        if self.settlement.finished:
            logger.debug("Retry sequence already settled, not starting another attempt")
            return
        self.attempts += 1
        attempt = self.attempts
        self.callbacks.on_attempt(attempt)
        latch = Settlement(partial(self._succeeded, attempt), partial(self._failed, attempt))
        self.invoker.invoke(self.operation, self.args, self.kwargs, latch.succeed, latch.fail)

    def _succeeded(self, attempt: int, result: Any) -> None:
        if self.settlement.succeed(result):
            logger.debug(f"Attempt {attempt} succeeded")
            self.callbacks.on_success(attempt, result, self.start_time)

    def _failed(self, attempt: int, error: Any) -> None:
        if self.settlement.finished:
            return
        logger.debug(f"Attempt {attempt} failed: {error!r}")
        decision = Settlement(partial(self._retry, attempt, error), self._abort)

        def retry() -> None:
            decision.succeed()

        def abort(reason: Any = _LAST_ERROR) -> None:
            decision.fail(error if reason is _LAST_ERROR else reason)

        try:
            self.strategy(attempt, error, retry, abort)
        except Exception as exc:  # noqa: BLE001
            logger.debug(f"Strategy raised after attempt {attempt}: {exc!r}")
            decision.fail(exc)

    def _retry(self, attempt: int, error: Any, _: Any = None) -> None:
        if self.settlement.finished:
            return
        self.callbacks.on_retry(attempt, error)
        self._attempt()

    def _abort(self, error: Any) -> None:
        if self.settlement.fail(error):
            logger.debug(f"Giving up after {self.attempts} attempts: {error!r}")
            self.callbacks.on_failure(self.attempts, error, self.start_time)
