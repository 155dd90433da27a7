r"""Unit tests for the Settlement latch."""

from __future__ import annotations

import threading
from unittest.mock import Mock

from aretry.settlement import Settlement


def test_settlement_succeed() -> None:
    """Test a success is forwarded to the success handler."""
    on_success, on_failure = Mock(), Mock()
    settlement = Settlement(on_success, on_failure)

    assert not settlement.finished
    assert settlement.succeed("result")
    assert settlement.finished
    on_success.assert_called_once_with("result")
    on_failure.assert_not_called()


def test_settlement_succeed_default_result() -> None:
    """Test succeed forwards None when no result is given."""
    on_success = Mock()
    Settlement(on_success, Mock()).succeed()
    on_success.assert_called_once_with(None)


def test_settlement_fail() -> None:
    """Test a failure is forwarded to the failure handler."""
    on_success, on_failure = Mock(), Mock()
    settlement = Settlement(on_success, on_failure)
    error = RuntimeError("boom")

    assert settlement.fail(error)
    on_failure.assert_called_once_with(error)
    on_success.assert_not_called()


def test_settlement_first_call_wins() -> None:
    """Test later calls of either kind are dropped."""
    on_success, on_failure = Mock(), Mock()
    settlement = Settlement(on_success, on_failure)

    assert settlement.succeed(1)
    assert not settlement.succeed(2)
    assert not settlement.fail("late")
    on_success.assert_called_once_with(1)
    on_failure.assert_not_called()


def test_settlement_failure_then_success_dropped() -> None:
    """Test a success after a failure is dropped."""
    on_success, on_failure = Mock(), Mock()
    settlement = Settlement(on_success, on_failure)

    assert settlement.fail("first")
    assert not settlement.succeed("second")
    on_failure.assert_called_once_with("first")
    on_success.assert_not_called()


def test_settlement_abandon() -> None:
    """Test abandon closes the latch without any outcome."""
    on_success, on_failure = Mock(), Mock()
    settlement = Settlement(on_success, on_failure)

    assert settlement.abandon()
    assert not settlement.abandon()
    assert not settlement.succeed(1)
    assert not settlement.fail(2)
    on_success.assert_not_called()
    on_failure.assert_not_called()


def test_settlement_abandon_after_settlement() -> None:
    """Test abandon reports a settled latch."""
    settlement = Settlement(Mock(), Mock())
    settlement.succeed()
    assert not settlement.abandon()


def test_settlement_handler_can_reenter() -> None:
    """Test a handler may call back into the settled latch."""
    outcomes = []

    def on_success(result: object) -> None:
        outcomes.append(result)
        assert not settlement.fail("reentrant")

    settlement = Settlement(on_success, outcomes.append)
    settlement.succeed("ok")
    assert outcomes == ["ok"]


def test_settlement_race_between_threads() -> None:
    """Test exactly one outcome is reported when threads race."""
    on_success, on_failure = Mock(), Mock()
    settlement = Settlement(on_success, on_failure)
    barrier = threading.Barrier(8)
    wins = []

    def worker(index: int) -> None:
        barrier.wait()
        if index % 2:
            wins.append(settlement.succeed(index))
        else:
            wins.append(settlement.fail(index))

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert wins.count(True) == 1
    assert on_success.call_count + on_failure.call_count == 1


def test_settlement_repr() -> None:
    """Test the string representation."""
    settlement = Settlement(Mock(), Mock())
    assert repr(settlement) == "Settlement(finished=False)"
    settlement.abandon()
    assert repr(settlement) == "Settlement(finished=True)"
