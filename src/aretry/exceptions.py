r"""Exception classes raised or delivered by aretry."""

from __future__ import annotations

__all__ = ["ConfigurationError", "OperationError", "RetryError", "as_exception"]

from typing import Any


class RetryError(Exception):
    """Base class for all aretry exceptions."""


class ConfigurationError(RetryError, ValueError):
    """Exception raised when a retrier is configured with invalid or
    unsatisfiable options.

    It is always raised synchronously by the factory, before any attempt
    is made.

    Example:
        ```pycon
        >>> from aretry import retrying
        >>> retrying(style="carrier-pigeon")
        Traceback (most recent call last):
            ...
        aretry.exceptions.ConfigurationError: Invalid style (must be 'node', 'promise' or a future factory): 'carrier-pigeon'

        ```
    """


class OperationError(RetryError):
    """Wrap a failure value that is not an exception.

    Futures can only be rejected with exceptions, so a terminal failure
    reported as a plain value (for example a string passed to a callback,
    or an attempt count reported by a custom strategy) is wrapped in this
    exception before being set on the returned future.

    Args:
        error: The original failure value.

    Example:
        ```pycon
        >>> from aretry.exceptions import OperationError
        >>> exc = OperationError("failure :(")
        >>> exc.error
        'failure :('

        ```
    """

    def __init__(self, error: Any) -> None:
        super().__init__(f"operation failed: {error!r}")
        self.error = error


def as_exception(error: Any) -> BaseException:
    """Return ``error`` unchanged if it is an exception, otherwise wrap
    it in an ``OperationError``.

    Args:
        error: The failure value.

    Returns:
        An exception suitable for ``Future.set_exception``.

    Example:
        ```pycon
        >>> from aretry.exceptions import as_exception
        >>> exc = ValueError("boom")
        >>> as_exception(exc) is exc
        True
        >>> as_exception(3).error
        3

        ```
    """
    if isinstance(error, BaseException):
        return error
    return OperationError(error)
