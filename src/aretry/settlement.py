r"""One-shot latch used to report an outcome exactly once."""

from __future__ import annotations

__all__ = ["Settlement"]

import logging
import threading
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class Settlement:
    """Single-fire latch forwarding the first success or failure.

    The first call to ``succeed`` or ``fail`` wins and forwards its value
    to the matching handler. Every later call, of either kind, is silently
    dropped so that racing completion paths (a late callback from an
    abandoned attempt, a timer that fires after settlement) cannot produce
    a second outcome.

    The flag is guarded by a lock because completions may arrive from
    timer threads as well as from the event loop.

    Args:
        on_success: Handler receiving the result.
        on_failure: Handler receiving the error.

    Example:
        ```pycon
        >>> from aretry.settlement import Settlement
        >>> outcomes = []
        >>> settlement = Settlement(outcomes.append, outcomes.append)
        >>> settlement.succeed("first")
        True
        >>> settlement.fail("second")
        False
        >>> outcomes
        ['first']
        >>> settlement.finished
        True

        ```
    """

    def __init__(
        self,
        on_success: Callable[[Any], Any],
        on_failure: Callable[[Any], Any],
    ) -> None:
        self._on_success = on_success
        self._on_failure = on_failure
        self._finished = False
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(finished={self._finished})"

    @property
    def finished(self) -> bool:
        """``True`` once an outcome was reported or the latch was
        abandoned."""
        return self._finished

    def succeed(self, result: Any = None) -> bool:
        """Report a success.

        Args:
            result: The result to forward.

        Returns:
            ``True`` if this call settled the latch, ``False`` if it was
            already settled.
        """
        if not self._close():
            return False
        self._on_success(result)
        return True

    def fail(self, error: Any) -> bool:
        """Report a failure.

        Args:
            error: The error to forward.

        Returns:
            ``True`` if this call settled the latch, ``False`` if it was
            already settled.
        """
        if not self._close():
            logger.debug(f"Dropping failure reported after settlement: {error!r}")
            return False
        self._on_failure(error)
        return True

    def abandon(self) -> bool:
        """Close the latch without reporting any outcome.

        Returns:
            ``True`` if the latch was still open.
        """
        return self._close()

    def _close(self) -> bool:
        with self._lock:
            if self._finished:
                return False
            self._finished = True
            return True
