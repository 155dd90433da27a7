r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that handles invocation
of user-defined callbacks at various points in the retry lifecycle.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

import logging
import time
from typing import TYPE_CHECKING, Any

from aretry.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.retry.config import CallbackConfig

logger: logging.Logger = logging.getLogger(__name__)


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    A callback that raises is logged and otherwise ignored: callbacks
    never change the outcome of a retry sequence.

    Attributes:
        callbacks: Configuration containing callback functions for lifecycle events.
    """

    def __init__(self, callbacks: CallbackConfig) -> None:
        """Initialize callback manager.

        Args:
            callbacks: Callback configuration.
        """
        self.callbacks = callbacks

    def on_attempt(self, attempt: int) -> None:
        """Invoke on_attempt callback.

        Args:
            attempt: The attempt about to start (1-indexed).
        """
        if self.callbacks.on_attempt:
            self._invoke(
                "on_attempt", self.callbacks.on_attempt, AttemptInfo(attempt=attempt)
            )

    def on_retry(self, attempt: int, error: Any) -> None:
        """Invoke on_retry callback.

        Args:
            attempt: The attempt that failed (1-indexed). The callback
                receives the number of the next attempt.
            error: The failure that triggered the retry.
        """
        if self.callbacks.on_retry:
            self._invoke(
                "on_retry", self.callbacks.on_retry, RetryInfo(attempt=attempt + 1, error=error)
            )

    def on_success(self, attempts: int, result: Any, start_time: float) -> None:
        """Invoke on_success callback.

        Args:
            attempts: Number of attempts made.
            result: The result delivered to the caller.
            start_time: Timestamp when the retrier was invoked.
        """
        if self.callbacks.on_success:
            self._invoke(
                "on_success",
                self.callbacks.on_success,
                SuccessInfo(attempts=attempts, result=result, total_time=time.time() - start_time),
            )

    def on_failure(self, attempts: int, error: Any, start_time: float) -> None:
        """Invoke on_failure callback.

        Args:
            attempts: Number of attempts made.
            error: The terminal error delivered to the caller.
            start_time: Timestamp when the retrier was invoked.
        """
        if self.callbacks.on_failure:
            self._invoke(
                "on_failure",
                self.callbacks.on_failure,
                FailureInfo(attempts=attempts, error=error, total_time=time.time() - start_time),
            )

    @staticmethod
    def _invoke(name: str, callback: Callable[[Any], Any], info: Any) -> None:
        try:
            callback(info)
        except Exception:
            logger.exception(f"{name} callback raised an exception")
