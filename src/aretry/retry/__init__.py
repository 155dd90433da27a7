r"""Retry package implementing the attempt loop and its strategies.

Public API:
    - RetryConfig: Configuration for retry behavior
    - CallbackConfig: Configuration for callbacks
    - CallbackManager: Manager for callback invocations
    - RetryExecution: Attempt loop for one invocation of a retrier
    - BaseStrategy, ImmediateStrategy, DelayStrategy, MaxTriesStrategy:
      Built-in strategies and their factory functions
"""

from __future__ import annotations

__all__ = [
    "BaseStrategy",
    "CallbackConfig",
    "CallbackManager",
    "DelayStrategy",
    "ImmediateStrategy",
    "MaxTriesStrategy",
    "RetryConfig",
    "RetryExecution",
    "delay",
    "immediate",
    "max_tries",
]

from aretry.retry.config import CallbackConfig, RetryConfig
from aretry.retry.executor import RetryExecution
from aretry.retry.manager import CallbackManager
from aretry.retry.strategy import (
    BaseStrategy,
    DelayStrategy,
    ImmediateStrategy,
    MaxTriesStrategy,
    delay,
    immediate,
    max_tries,
)
