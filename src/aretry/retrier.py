r"""The retrier callable returned by the factory."""

from __future__ import annotations

__all__ = ["Retrier"]

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from aretry.conventions.promise import PromiseInput
from aretry.retry.executor import RetryExecution
from aretry.retry.manager import CallbackManager
from aretry.retry.strategy import bind_strategy
from aretry.scheduling import resolve_scheduler

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.retry.config import RetryConfig
    from aretry.settlement import Settlement

logger: logging.Logger = logging.getLogger(__name__)


class Retrier:
    """Invoke operations with retries.

    The calling conventions are resolved once, when the retrier is
    created. Every invocation builds its own strategy, attempt counter
    and settlement, so a retrier can be shared by concurrent callers.

    Args:
        config: The retry configuration.

    Raises:
        ConfigurationError: If a calling convention is invalid.

    Example:
        ```pycon
        >>> from aretry import retrying
        >>> retry = retrying(style="node", tries=1)
        >>> def shout(text, callback):
        ...     callback(None, text.upper())
        ...
        >>> retry(shout, "success!", lambda error, result=None: print(error, result))
        None SUCCESS!

        ```
    """

    def __init__(self, config: RetryConfig) -> None:
        self.config = config
        self.invoker = config.input_convention.input_adapter()
        self.output = config.output_convention.output_adapter()
        self.callbacks = CallbackManager(config.callbacks)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(invoker={self.invoker!r}, output={self.output!r})"

    def __call__(self, operation: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Any:
        """Invoke ``operation`` until it succeeds or the strategy gives
        up.

        Args:
            operation: The operation to retry, in the input convention.
            *args: Positional arguments of the operation. With callback
                output, a trailing callable is the completion callback.
            **kwargs: Keyword arguments of the operation.

        Returns:
            ``None`` with callback output, or a future with promise output.

        Raises:
            TypeError: If ``operation`` is not callable.
            RuntimeError: If ``operation`` is a coroutine function used
                with promise input while no event loop is running.
        """
        if not callable(operation):
            msg = f"operation must be callable, got {operation!r}"
            raise TypeError(msg)
        if isinstance(self.invoker, PromiseInput) and inspect.iscoroutinefunction(operation):
            try:
                asyncio.get_running_loop()
            except RuntimeError as exc:
                msg = (
                    f"coroutine operation {operation!r} needs a running event loop; "
                    "call the retrier from a coroutine"
                )
                raise RuntimeError(msg) from exc
        scheduler = resolve_scheduler(self.config.scheduler)
        strategy = bind_strategy(self.config.build_strategy(), scheduler)

        def execute(operation_args: tuple[Any, ...], settlement: Settlement) -> None:
            RetryExecution(
                operation=operation,
                args=operation_args,
                kwargs=kwargs,
                invoker=self.invoker,
                strategy=strategy,
                settlement=settlement,
                callbacks=self.callbacks,
            ).start()

        return self.output.run(execute, args)
