r"""Promise calling convention, rendered with awaitables and futures.

An operation in this convention returns an awaitable (a coroutine, an
``asyncio`` future or task) or a future-like object exposing
``add_done_callback`` such as ``concurrent.futures.Future``. The retrier
itself returns a future created by a future factory.
"""

from __future__ import annotations

__all__ = ["PromiseInput", "PromiseOutput", "as_future"]

import asyncio
import concurrent.futures
import inspect
import logging
from functools import partial
from typing import TYPE_CHECKING, Any

from aretry.exceptions import as_exception
from aretry.scheduling import in_loop_thread
from aretry.settlement import Settlement

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

_CANCELLED_ERRORS = (asyncio.CancelledError, concurrent.futures.CancelledError)


def as_future(value: Any) -> Any:
    """Adapt the value returned by an operation to a future-like object.

    Args:
        value: The value returned by the operation.

    Returns:
        ``value`` itself if it exposes ``add_done_callback``, otherwise an
        ``asyncio`` future wrapping the awaitable on the running loop.

    Raises:
        TypeError: If ``value`` is neither a future nor an awaitable.
        RuntimeError: If ``value`` is an awaitable and no event loop is
            running.
    """
    if hasattr(value, "add_done_callback"):
        return value
    if not inspect.isawaitable(value):
        msg = f"operation must return an awaitable or a future, got {type(value).__qualname__}"
        raise TypeError(msg)
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        if inspect.iscoroutine(value):
            value.close()
        raise
    return asyncio.ensure_future(value, loop=loop)


def _deliver(succeed: Callable[[Any], Any], fail: Callable[[Any], Any], future: Any) -> None:
    try:
        result = future.result()
    except (Exception, *_CANCELLED_ERRORS) as exc:
        fail(exc)
    else:
        succeed(result)


class PromiseInput:
    """Invoke operations returning awaitables or futures.

    The operation is called with the given arguments only. Rejections,
    cancellations and synchronous exceptions are reported as failures.
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def invoke(
        self,
        operation: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        succeed: Callable[[Any], Any],
        fail: Callable[[Any], Any],
    ) -> None:
        """Invoke ``operation`` once.

        Args:
            operation: The operation returning an awaitable or a future.
            args: Positional arguments.
            kwargs: Keyword arguments.
            succeed: Called with the result on success.
            fail: Called with the error on failure.
        """
        try:
            future = as_future(operation(*args, **kwargs))
        except Exception as exc:  # noqa: BLE001
            fail(exc)
            return
        future.add_done_callback(partial(_deliver, succeed, fail))


def _on_future_loop(future: Any, fn: Callable[..., Any], *args: Any) -> None:
    # asyncio futures may only be settled from the thread running their loop
    if isinstance(future, asyncio.Future) and not in_loop_thread(future.get_loop()):
        future.get_loop().call_soon_threadsafe(fn, future, *args)
    else:
        fn(future, *args)


def _set_result(future: Any, result: Any) -> None:
    if not future.done():
        future.set_result(result)


def _set_exception(future: Any, error: Any) -> None:
    if not future.done():
        future.set_exception(as_exception(error))


def _resolve(future: Any, result: Any) -> None:
    _on_future_loop(future, _set_result, result)


def _reject(future: Any, error: Any) -> None:
    _on_future_loop(future, _set_exception, error)


class PromiseOutput:
    """Deliver the retrier outcome through a future.

    Args:
        future_factory: Optional zero-argument callable returning a new
            future, for example ``concurrent.futures.Future``. Defaults to
            ``create_future`` of the running event loop.

    Cancelling the returned future abandons the retry sequence: no
    further attempt is started.
    """

    def __init__(self, future_factory: Callable[[], Any] | None = None) -> None:
        self.future_factory = future_factory

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(future_factory={self.future_factory!r})"

    def create_future(self) -> Any:
        """Create the future returned to the caller.

        Raises:
            RuntimeError: If no factory was given and no event loop is
                running.
        """
        if self.future_factory is not None:
            return self.future_factory()
        return asyncio.get_running_loop().create_future()

    def run(
        self,
        execute: Callable[[tuple[Any, ...], Settlement], None],
        args: tuple[Any, ...],
    ) -> Any:
        """Start a retry sequence reporting through a future.

        Args:
            execute: Starts the attempt loop with the operation arguments
                and the settlement.
            args: The operation arguments.

        Returns:
            The future settled with the outcome.
        """
        future = self.create_future()
        settlement = Settlement(partial(_resolve, future), partial(_reject, future))
        future.add_done_callback(lambda _: settlement.abandon())
        try:
            execute(args, settlement)
        except Exception as exc:  # noqa: BLE001
            settlement.fail(exc)
        return future
