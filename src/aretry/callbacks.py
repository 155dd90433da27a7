r"""Callback types and data structures for observability.

This module lets users hook into the retry lifecycle for logging,
metrics and alerting. Four hooks are available:

- on_attempt: Called before each invocation of the operation
- on_retry: Called when the strategy decides to try again
- on_success: Called when the retrier settles with a result
- on_failure: Called when the retrier settles with an error

Example:
    ```pycon
    >>> from aretry import retrying
    >>> from aretry.callbacks import RetryInfo
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"Starting attempt {info.attempt} after {info.error!r}")
    ...
    >>> retry = retrying(tries=3, on_retry=log_retry)

    ```
"""

from __future__ import annotations

__all__ = ["AttemptInfo", "FailureInfo", "RetryInfo", "SuccessInfo"]

from dataclasses import dataclass
from typing import Any


@dataclass
class AttemptInfo:
    """Information passed to on_attempt callback.

    Attributes:
        attempt: The attempt about to start (1-indexed).
    """

    attempt: int


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        attempt: The attempt that will be started next (1-indexed). The
            first retry is attempt 2.
        error: The failure that triggered the retry.
    """

    attempt: int
    error: Any


@dataclass
class SuccessInfo:
    """Information passed to on_success callback.

    Attributes:
        attempts: The number of attempts made, including the successful one.
        result: The result delivered to the caller.
        total_time: Seconds elapsed since the retrier was invoked.
    """

    attempts: int
    result: Any
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        attempts: The number of attempts made.
        error: The terminal error delivered to the caller.
        total_time: Seconds elapsed since the retrier was invoked.
    """

    attempts: int
    error: Any
    total_time: float
