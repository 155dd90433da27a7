r"""Configuration dataclasses for retry behavior.

This module provides the configuration object from which retriers are
built, and the logic turning delay options into a strategy.
"""

from __future__ import annotations

__all__ = ["CallbackConfig", "RetryConfig"]

import logging
from collections.abc import Sequence
from dataclasses import dataclass, fields, replace
from numbers import Real
from typing import TYPE_CHECKING, Any

from aretry.backoff import (
    exponential_delays,
    fibonacci_delays,
    fixed_delay,
    max_delay_cap,
    random_delays,
    specified_delays,
)
from aretry.backoff.base import fresh_delay
from aretry.conventions import resolve_convention
from aretry.core.validation import (
    validate_callable,
    validate_jitter_range,
    validate_non_negative,
    validate_tries,
)
from aretry.exceptions import ConfigurationError
from aretry.retry.strategy import delay, immediate, max_tries

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.backoff.base import DelayFunction
    from aretry.callbacks import AttemptInfo, FailureInfo, RetryInfo, SuccessInfo
    from aretry.conventions import Convention
    from aretry.retry.strategy import Strategy
    from aretry.scheduling import Scheduler

logger: logging.Logger = logging.getLogger(__name__)

# Delay tags accepted by the ``delay`` option
DELAY_TAGS: dict[str, Callable[[], DelayFunction]] = {
    "exponential": exponential_delays,
    "fibonacci": fibonacci_delays,
}


@dataclass
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_attempt: Optional callback invoked before each attempt.
        on_retry: Optional callback invoked when the strategy decides to retry.
        on_success: Optional callback invoked when the retrier succeeds.
        on_failure: Optional callback invoked when the retrier fails.
    """

    on_attempt: Callable[[AttemptInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[SuccessInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Every parameter is validated when the configuration is created, so
    invalid options are reported before any attempt is made.

    Args:
        style: Default calling convention for both input and output:
            ``"node"``, ``"promise"`` or a future factory.
        input: Optional calling convention of the retried operation.
        output: Optional calling convention of the retrier itself.
        strategy: Optional explicit strategy. Overrides ``delay``,
            ``max_delay`` and ``fuzz``.
        delay: Optional delay specification: a number of seconds, a
            sequence of seconds, ``"fibonacci"``, ``"exponential"``, a
            ``BaseDelay`` or a function mapping the attempt to seconds.
        max_delay: Optional cap in seconds applied to computed delays.
        fuzz: Optional random jitter added to computed delays, a scalar
            ``r`` for ``[0, r)`` or a ``(lo, hi)`` pair.
        tries: Optional maximum number of attempts, wrapping the strategy.
        scheduler: Optional scheduler. Defaults to the running event loop,
            or threading timers when no loop is running.
        on_attempt: Optional callback invoked before each attempt.
        on_retry: Optional callback invoked when the strategy decides to retry.
        on_success: Optional callback invoked when the retrier succeeds.
        on_failure: Optional callback invoked when the retrier fails.

    Raises:
        ConfigurationError: If any option is invalid.

    Example:
        ```pycon
        >>> from aretry.retry import RetryConfig
        >>> config = RetryConfig(delay=[1, 2, 5], tries=4)
        >>> config.build_strategy()
        MaxTriesStrategy(tries=4, inner=DelayStrategy(delay_fn=SpecifiedDelays(delays=[1, 2, 5])))
        >>> config.merge(tries=10).tries
        10

        ```
    """

    style: Any = "node"
    input: Any = None
    output: Any = None
    strategy: Strategy | None = None
    delay: Any = None
    max_delay: float | None = None
    fuzz: Any = None
    tries: int | None = None
    scheduler: Scheduler | None = None
    on_attempt: Callable[[AttemptInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[SuccessInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ConfigurationError: If any parameter fails validation.
        """
        # Resolve conventions eagerly so invalid values fail at setup time
        self.input_convention  # noqa: B018
        self.output_convention  # noqa: B018
        if self.strategy is not None:
            validate_callable("strategy", self.strategy)
        if self.tries is not None:
            validate_tries(self.tries)
        if self.max_delay is not None:
            validate_non_negative("max_delay", self.max_delay)
        if self.fuzz is not None:
            validate_jitter_range(self.fuzz)
        for name in ("on_attempt", "on_retry", "on_success", "on_failure"):
            value = getattr(self, name)
            if value is not None:
                validate_callable(name, value)
        self.build_delay()

    @property
    def input_convention(self) -> Convention:
        """The calling convention used to invoke the operation."""
        if self.input is not None:
            return resolve_convention(self.input, name="input")
        return resolve_convention(self.style, name="style")

    @property
    def output_convention(self) -> Convention:
        """The calling convention used to deliver the outcome."""
        if self.output is not None:
            return resolve_convention(self.output, name="output")
        return resolve_convention(self.style, name="style")

    @property
    def callbacks(self) -> CallbackConfig:
        """The lifecycle callbacks of this configuration."""
        return CallbackConfig(
            on_attempt=self.on_attempt,
            on_retry=self.on_retry,
            on_success=self.on_success,
            on_failure=self.on_failure,
        )

    def build_delay(self) -> DelayFunction | None:
        """Build the delay function described by ``delay``, ``max_delay``
        and ``fuzz``.

        The cap is applied before the jitter, so jittered delays may
        exceed ``max_delay`` by at most the jitter range.

        Returns:
            A new delay function, or ``None`` if neither ``delay`` nor
            ``fuzz`` is set.

        Raises:
            ConfigurationError: If ``delay`` is not a valid specification.
        """
        value = self.delay
        if value is None:
            delay_fn = None
        elif isinstance(value, str):
            if value not in DELAY_TAGS:
                msg = f"Invalid delay tag (must be one of {sorted(DELAY_TAGS)}): {value!r}"
                raise ConfigurationError(msg)
            delay_fn = DELAY_TAGS[value]()
        elif isinstance(value, Real) and not isinstance(value, bool):
            delay_fn = fixed_delay(value)
        elif isinstance(value, Sequence):
            delay_fn = specified_delays(value)
        elif callable(value):
            delay_fn = fresh_delay(value)
        else:
            msg = f"Invalid delay (must be a number, a sequence, a tag or a function): {value!r}"
            raise ConfigurationError(msg)

        if delay_fn is not None and self.max_delay is not None:
            delay_fn = max_delay_cap(self.max_delay, delay_fn)
        if self.fuzz is not None:
            delay_fn = random_delays(self.fuzz, delay_fn)
        return delay_fn

    def build_strategy(self) -> Strategy:
        """Build the strategy for one retry sequence.

        A new strategy is built for every call so that stateful delay
        functions are never shared between independent retry sequences.

        Returns:
            The explicit strategy, else a delay strategy built from the
            delay options, else an immediate strategy, wrapped in a
            maximum-attempts strategy when ``tries`` is set.
        """
        strategy = self.strategy
        if strategy is None:
            delay_fn = self.build_delay()
            if delay_fn is not None:
                strategy = delay(delay_fn)
        elif self.delay is not None or self.fuzz is not None:
            logger.debug("Explicit strategy given, ignoring delay options")
        if self.tries is not None:
            return max_tries(self.tries, strategy)
        if strategy is None:
            return immediate()
        return strategy

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new, validated RetryConfig instance.

        Example:
            ```pycon
            >>> from aretry.retry import RetryConfig
            >>> config = RetryConfig(tries=3)
            >>> config.merge(tries=5, delay=None).tries
            5
            >>> config.tries  # Original unchanged
            3

            ```
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with every option of this configuration.
        """
        return {field.name: getattr(self, field.name) for field in fields(self)}
