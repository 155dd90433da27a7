r"""Unit tests for the callback calling convention."""

from __future__ import annotations

from unittest.mock import Mock

from aretry.conventions.node import NodeInput, NodeOutput, split_callback
from aretry.settlement import Settlement
from tests.helpers import Outcome

####################################
#     Tests for split_callback     #
####################################


def test_split_callback_trailing_callable() -> None:
    """Test a trailing callable is split off."""
    callback = Mock()
    args, found = split_callback(("a", 1, callback))
    assert args == ("a", 1)
    assert found is callback


def test_split_callback_no_callable() -> None:
    """Test a no-op callback is substituted."""
    args, callback = split_callback(("a", 1))
    assert args == ("a", 1)
    assert callback("ignored") is None


def test_split_callback_empty() -> None:
    """Test empty arguments."""
    args, callback = split_callback(())
    assert args == ()
    assert callable(callback)


###############################
#     Tests for NodeInput     #
###############################


def test_node_input_success() -> None:
    """Test a callback with a None error is reported as a success."""
    succeed, fail = Mock(), Mock()

    def operation(text, suffix, callback):
        callback(None, text + suffix)

    NodeInput().invoke(operation, ("a",), {"suffix": "b"}, succeed, fail)
    succeed.assert_called_once_with("ab")
    fail.assert_not_called()


def test_node_input_success_without_result() -> None:
    """Test a callback called without arguments is a success with None."""
    succeed, fail = Mock(), Mock()
    NodeInput().invoke(lambda callback: callback(), (), {}, succeed, fail)
    succeed.assert_called_once_with(None)
    fail.assert_not_called()


def test_node_input_failure() -> None:
    """Test a non-None error is reported as a failure."""
    succeed, fail = Mock(), Mock()
    NodeInput().invoke(lambda callback: callback("failure :("), (), {}, succeed, fail)
    fail.assert_called_once_with("failure :(")
    succeed.assert_not_called()


def test_node_input_falsy_error_is_failure() -> None:
    """Test falsy errors other than None are failures."""
    succeed, fail = Mock(), Mock()
    NodeInput().invoke(lambda callback: callback(0), (), {}, succeed, fail)
    fail.assert_called_once_with(0)


def test_node_input_synchronous_exception() -> None:
    """Test an exception raised by the operation is a failure."""
    succeed, fail = Mock(), Mock()
    error = RuntimeError("boom")

    def operation(callback):
        raise error

    NodeInput().invoke(operation, (), {}, succeed, fail)
    fail.assert_called_once_with(error)
    succeed.assert_not_called()


def test_node_input_deferred_callback() -> None:
    """Test the callback may be called after invoke returned."""
    succeed, fail = Mock(), Mock()
    callbacks = []
    NodeInput().invoke(callbacks.append, (), {}, succeed, fail)
    succeed.assert_not_called()
    callbacks[0](None, 42)
    succeed.assert_called_once_with(42)


################################
#     Tests for NodeOutput     #
################################


def test_node_output_success(outcome: Outcome) -> None:
    """Test a success is delivered as (None, result)."""

    def execute(args, settlement):
        assert args == ("x",)
        settlement.succeed("result")

    assert NodeOutput().run(execute, ("x", outcome)) is None
    assert outcome.calls == [(None, "result")]


def test_node_output_failure(outcome: Outcome) -> None:
    """Test a failure is delivered as (error,)."""
    error = RuntimeError("boom")
    NodeOutput().run(lambda args, settlement: settlement.fail(error), (outcome,))
    assert outcome.calls == [(error,)]
    assert outcome.error is error


def test_node_output_settles_once(outcome: Outcome) -> None:
    """Test only the first outcome reaches the callback."""

    def execute(args, settlement):
        settlement.succeed(1)
        settlement.fail("late")
        settlement.succeed(2)

    NodeOutput().run(execute, (outcome,))
    assert outcome.calls == [(None, 1)]


def test_node_output_without_callback() -> None:
    """Test the outcome is discarded when no callback is given."""
    settlements = []

    def execute(args, settlement):
        settlements.append(settlement)
        settlement.succeed("ignored")

    NodeOutput().run(execute, ("x",))
    assert isinstance(settlements[0], Settlement)
    assert settlements[0].finished
