r"""Unit tests for callback manager."""

from __future__ import annotations

import logging
from unittest.mock import Mock, patch

import pytest

from aretry.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo
from aretry.retry.config import CallbackConfig
from aretry.retry.manager import CallbackManager


def test_callback_manager_creation() -> None:
    """Test CallbackManager initialization."""
    config = CallbackConfig()
    manager = CallbackManager(config)

    assert manager.callbacks is config


def test_on_attempt_callback_invoked(mock_callback: Mock) -> None:
    """Test on_attempt callback is invoked correctly."""
    manager = CallbackManager(CallbackConfig(on_attempt=mock_callback))

    manager.on_attempt(attempt=2)

    mock_callback.assert_called_once_with(AttemptInfo(attempt=2))


def test_on_retry_callback_invoked(mock_callback: Mock) -> None:
    """Test on_retry callback receives the next attempt."""
    manager = CallbackManager(CallbackConfig(on_retry=mock_callback))
    error = RuntimeError("boom")

    manager.on_retry(attempt=1, error=error)

    mock_callback.assert_called_once()
    call_args = mock_callback.call_args[0][0]
    assert isinstance(call_args, RetryInfo)
    assert call_args.attempt == 2  # The attempt about to start
    assert call_args.error is error


@patch("aretry.retry.manager.time.time", return_value=105.0)
def test_on_success_callback_invoked(mock_time: Mock, mock_callback: Mock) -> None:  # noqa: ARG001
    """Test on_success callback is invoked correctly."""
    manager = CallbackManager(CallbackConfig(on_success=mock_callback))

    manager.on_success(attempts=3, result="ok", start_time=100.0)

    mock_callback.assert_called_once_with(SuccessInfo(attempts=3, result="ok", total_time=5.0))


@patch("aretry.retry.manager.time.time", return_value=102.5)
def test_on_failure_callback_invoked(mock_time: Mock, mock_callback: Mock) -> None:  # noqa: ARG001
    """Test on_failure callback is invoked correctly."""
    manager = CallbackManager(CallbackConfig(on_failure=mock_callback))

    manager.on_failure(attempts=4, error="failure", start_time=100.0)

    mock_callback.assert_called_once_with(
        FailureInfo(attempts=4, error="failure", total_time=2.5)
    )


def test_callbacks_none() -> None:
    """Test the hooks do nothing when no callback is configured."""
    manager = CallbackManager(CallbackConfig())

    # Should not raise
    manager.on_attempt(attempt=1)
    manager.on_retry(attempt=1, error="error")
    manager.on_success(attempts=1, result=None, start_time=0.0)
    manager.on_failure(attempts=1, error="error", start_time=0.0)


@pytest.mark.parametrize("name", ["on_attempt", "on_retry", "on_success", "on_failure"])
def test_callback_exception_is_logged(name: str, caplog: pytest.LogCaptureFixture) -> None:
    """Test a raising callback is logged and does not propagate."""
    callback = Mock(side_effect=RuntimeError("callback failure"))
    manager = CallbackManager(CallbackConfig(**{name: callback}))

    with caplog.at_level(logging.ERROR, logger="aretry.retry.manager"):
        if name == "on_attempt":
            manager.on_attempt(attempt=1)
        elif name == "on_retry":
            manager.on_retry(attempt=1, error="error")
        elif name == "on_success":
            manager.on_success(attempts=1, result="ok", start_time=0.0)
        else:
            manager.on_failure(attempts=1, error="error", start_time=0.0)

    callback.assert_called_once()
    assert f"{name} callback raised an exception" in caplog.text
    assert "callback failure" in caplog.text
