r"""Callback ("node") calling convention.

An operation in this convention takes a trailing completion callback
``callback(error=None, result=None)``. A non-``None`` error means the
operation failed.
"""

from __future__ import annotations

__all__ = ["NodeInput", "NodeOutput", "split_callback"]

import logging
from typing import TYPE_CHECKING, Any

from aretry.settlement import Settlement

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


def _noop(*args: Any) -> None:
    """Completion callback used when the caller supplied none."""


def split_callback(args: tuple[Any, ...]) -> tuple[tuple[Any, ...], Callable[..., Any]]:
    """Split a trailing completion callback off ``args``.

    Args:
        args: The positional arguments given to the retrier.

    Returns:
        The operation arguments and the callback. A no-op callback is
        substituted when the last argument is not callable.

    Example:
        ```pycon
        >>> from aretry.conventions.node import split_callback
        >>> split_callback(("a", print))
        (('a',), <built-in function print>)
        >>> args, callback = split_callback(("a", "b"))
        >>> args
        ('a', 'b')

        ```
    """
    if args and callable(args[-1]):
        return args[:-1], args[-1]
    return args, _noop


class NodeInput:
    """Invoke callback-style operations.

    A completion callback is appended to the positional arguments.
    Exceptions raised synchronously by the operation are reported as
    failures.
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
            operation: The callback-style operation.
            args: Positional arguments, the completion callback is
                appended after them.
            kwargs: Keyword arguments.
            succeed: Called with the result on success.
            fail: Called with the error on failure.
        """

        def callback(error: Any = None, result: Any = None) -> None:
            if error is not None:
                fail(error)
            else:
                succeed(result)

        try:
            operation(*args, callback, **kwargs)
        except Exception as exc:  # noqa: BLE001
            fail(exc)


class NodeOutput:
    """Deliver the retrier outcome to a trailing completion callback.

    On success the callback receives ``(None, result)``, on failure it
    receives ``(error,)``.
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def run(
        self,
        execute: Callable[[tuple[Any, ...], Settlement], None],
        args: tuple[Any, ...],
    ) -> None:
        """Start a retry sequence reporting through a callback.

        Args:
            execute: Starts the attempt loop with the operation arguments
                and the settlement.
            args: The positional arguments given to the retrier, possibly
                ending with the completion callback.
        """
        args, callback = split_callback(args)
        settlement = Settlement(lambda result: callback(None, result), callback)
        execute(args, settlement)
