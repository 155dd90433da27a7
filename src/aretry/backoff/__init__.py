r"""Delay functions and combinators for retry delays.

This package provides the delay functions used to space out retries:
explicit lists, exponential and Fibonacci sequences, random jitter and
a maximum cap. Every delay function maps a 1-indexed attempt number to
a delay in seconds and can be lifted into a retry strategy with
``aretry.retry.strategy.delay``.
"""

from __future__ import annotations

__all__ = [
    "BaseDelay",
    "ExponentialDelays",
    "FibonacciDelays",
    "MaxDelayCap",
    "RandomDelays",
    "SpecifiedDelays",
    "exponential_delays",
    "fibonacci_delays",
    "fixed_delay",
    "max_delay_cap",
    "random_delays",
    "specified_delays",
]

from aretry.backoff.base import BaseDelay
from aretry.backoff.cap import MaxDelayCap, max_delay_cap
from aretry.backoff.constant import SpecifiedDelays, fixed_delay, specified_delays
from aretry.backoff.exponential import ExponentialDelays, exponential_delays
from aretry.backoff.fibonacci import FibonacciDelays, fibonacci_delays
from aretry.backoff.jitter import RandomDelays, random_delays
