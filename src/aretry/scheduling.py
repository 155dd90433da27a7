r"""Schedulers used to delay retries.

A scheduler is anything exposing ``call_later(delay, callback)`` and
``call_soon(callback)``. A running ``asyncio`` event loop is wrapped in
``LoopScheduler`` so that retries can be scheduled from any thread.
``ThreadingScheduler`` covers callers that drive callback-style
operations without an event loop.
"""

from __future__ import annotations

__all__ = [
    "LoopScheduler",
    "Scheduler",
    "ThreadingScheduler",
    "in_loop_thread",
    "resolve_scheduler",
]

import asyncio
import logging
import threading
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Protocol for the timer capability used by delay strategies."""

    def call_later(self, delay: float, callback: Callable[[], Any]) -> Any:
        """Run ``callback`` after ``delay`` seconds."""

    def call_soon(self, callback: Callable[[], Any]) -> Any:
        """Run ``callback`` on the next scheduling tick."""


class ThreadingScheduler:
    """Scheduler backed by daemon ``threading.Timer`` threads.

    Callbacks run on the timer thread, so the retried operation and the
    completion callback are invoked from that thread too.

    Example:
        ```pycon
        >>> import threading
        >>> from aretry.scheduling import ThreadingScheduler
        >>> done = threading.Event()
        >>> timer = ThreadingScheduler().call_later(0.01, done.set)
        >>> done.wait(1.0)
        True

        ```
    """

    def call_later(self, delay: float, callback: Callable[[], Any]) -> threading.Timer:
        timer = threading.Timer(max(delay, 0.0), callback)
        timer.daemon = True
        timer.start()
        return timer

    def call_soon(self, callback: Callable[[], Any]) -> threading.Timer:
        return self.call_later(0.0, callback)


def in_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
    """Indicate whether ``loop`` is the loop running in the current
    thread."""
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


class LoopScheduler:
    """Scheduler running callbacks on an ``asyncio`` event loop.

    Operations may complete from worker threads, so callbacks are always
    handed over with ``call_soon_threadsafe``. Timers are armed on the
    loop thread.

    Args:
        loop: The event loop running the callbacks.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.scheduling import LoopScheduler
        >>> async def main():
        ...     done = asyncio.Event()
        ...     LoopScheduler(asyncio.get_running_loop()).call_later(0.01, done.set)
        ...     await done.wait()
        ...     return done.is_set()
        ...
        >>> asyncio.run(main())
        True

        ```
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self.loop = loop

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(loop={self.loop!r})"

    def call_later(self, delay: float, callback: Callable[[], Any]) -> None:
        if in_loop_thread(self.loop):
            self.loop.call_later(delay, callback)
        else:
            self.loop.call_soon_threadsafe(self.loop.call_later, delay, callback)

    def call_soon(self, callback: Callable[[], Any]) -> None:
        self.loop.call_soon_threadsafe(callback)


def resolve_scheduler(scheduler: Scheduler | None = None) -> Scheduler:
    """Return the scheduler to use for the current call.

    Args:
        scheduler: An explicitly injected scheduler. Returned unchanged
            when provided.

    Returns:
        The injected scheduler, else a ``LoopScheduler`` over the running
        ``asyncio`` event loop, else a new ``ThreadingScheduler``.

    Example:
        ```pycon
        >>> from aretry.scheduling import ThreadingScheduler, resolve_scheduler
        >>> isinstance(resolve_scheduler(), ThreadingScheduler)  # no running loop
        True

        ```
    """
    if scheduler is not None:
        return scheduler
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop, falling back to threading timers")
        return ThreadingScheduler()
    return LoopScheduler(loop)
