r"""aretry - Retry orchestration for asynchronous operations.

This package re-invokes an asynchronous operation that may fail according
to a pluggable strategy, until it succeeds, the strategy gives up, or a
maximum number of attempts is reached. Operations may be written in
callback style (a trailing ``callback(error, result)``) or return
awaitables and futures, and the retrier can report back in either style.

Key Features:
    - Callback and awaitable/future calling conventions, on both sides
    - Composable delays: explicit lists, exponential, Fibonacci, jitter, cap
    - Strategies deciding, possibly asynchronously, to retry or give up
    - Exactly-once settlement, even when completions race
    - Lifecycle callbacks for observability (logging, metrics, alerting)

Example:
    ```pycon
    >>> import asyncio
    >>> from aretry import retrying
    >>> retry = retrying(style="promise", delay="exponential", max_delay=30, tries=5)
    >>> async def fetch(url):
    ...     return f"fetched {url}"
    ...
    >>> async def main():
    ...     return await retry(fetch, "https://api.example.com/data")
    ...
    >>> asyncio.run(main())
    'fetched https://api.example.com/data'

    ```
"""

from __future__ import annotations

__all__ = [
    "AttemptInfo",
    "ConfigurationError",
    "FailureInfo",
    "OperationError",
    "Retrier",
    "RetryConfig",
    "RetryError",
    "RetryInfo",
    "SuccessInfo",
    "ThreadingScheduler",
    "__version__",
    "create_retrier",
    "delay",
    "exponential_delays",
    "fibonacci_delays",
    "fixed_delay",
    "immediate",
    "max_delay_cap",
    "max_tries",
    "random_delays",
    "retrying",
    "specified_delays",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.backoff import (
    exponential_delays,
    fibonacci_delays,
    fixed_delay,
    max_delay_cap,
    random_delays,
    specified_delays,
)
from aretry.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo
from aretry.exceptions import ConfigurationError, OperationError, RetryError
from aretry.factory import create_retrier, retrying
from aretry.retrier import Retrier
from aretry.retry import RetryConfig, delay, immediate, max_tries
from aretry.scheduling import ThreadingScheduler

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
