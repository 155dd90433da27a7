r"""Shared test helpers for retrier tests.

This module contains a deterministic scheduler and small operations in
both calling conventions, used across the unit and integration tests.
"""

from __future__ import annotations

__all__ = [
    "FakeScheduler",
    "Outcome",
    "assert_delays",
    "async_fail_then_succeed",
    "fail_then_succeed",
]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine


class FakeScheduler:
    """Scheduler recording callbacks instead of running them.

    Attributes:
        scheduled: Pending ``(delay, callback)`` pairs, ``call_soon``
            being recorded with a delay of ``None``.
        delays: Every delay ever scheduled, in order.
    """

    def __init__(self) -> None:
        self.scheduled: list[tuple[float | None, Callable[[], Any]]] = []
        self.delays: list[float | None] = []

    def call_later(self, delay: float, callback: Callable[[], Any]) -> None:
        self.scheduled.append((delay, callback))
        self.delays.append(delay)

    def call_soon(self, callback: Callable[[], Any]) -> None:
        self.scheduled.append((None, callback))
        self.delays.append(None)

    def run_next(self) -> None:
        _, callback = self.scheduled.pop(0)
        callback()

    def run_all(self, limit: int = 100) -> int:
        """Run pending callbacks, including the ones they schedule.

        Returns:
            The number of callbacks run.
        """
        count = 0
        while self.scheduled and count < limit:
            self.run_next()
            count += 1
        return count


@dataclass
class Outcome:
    """Completion callback recording what a callback-style retrier
    reported."""

    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)

    @property
    def error(self) -> Any:
        return self.calls[0][0]

    @property
    def result(self) -> Any:
        return self.calls[0][1]


def fail_then_succeed(failures: int, result: Any = "ok") -> Callable[..., None]:
    """Return a callback-style operation failing ``failures`` times
    before succeeding.

    The returned function exposes the number of invocations as
    ``calls``.
    """

    def operation(*args: Any) -> None:
        callback = args[-1]
        operation.calls += 1
        if operation.calls <= failures:
            callback(RuntimeError(f"failure {operation.calls}"))
        else:
            callback(None, result)

    operation.calls = 0
    return operation


def async_fail_then_succeed(
    failures: int, result: Any = "ok"
) -> Callable[..., Coroutine[Any, Any, Any]]:
    """Return a coroutine function failing ``failures`` times before
    succeeding.

    The returned function exposes the number of invocations as
    ``calls``.
    """

    async def operation(*args: Any) -> Any:
        operation.calls += 1
        if operation.calls <= failures:
            msg = f"failure {operation.calls}"
            raise RuntimeError(msg)
        return result

    operation.calls = 0
    return operation


def assert_delays(delay_fn: Callable[[int], float], expected: list[float]) -> None:
    """Assert that querying attempts ``1..len(expected)`` yields
    ``expected``."""
    actual = [delay_fn(attempt) for attempt in range(1, len(expected) + 1)]
    assert actual == expected
