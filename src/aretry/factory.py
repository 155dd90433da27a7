r"""Factory functions building retriers from options."""

from __future__ import annotations

__all__ = ["create_retrier", "retrying"]

from dataclasses import fields
from typing import Any

from aretry.exceptions import ConfigurationError
from aretry.retrier import Retrier
from aretry.retry.config import RetryConfig

_OPTION_NAMES = frozenset(field.name for field in fields(RetryConfig))


def create_retrier(config: RetryConfig) -> Retrier:
    r"""Return a retrier for an existing configuration.

    Args:
        config: The retry configuration.

    Returns:
        The retrier.
    """
    return Retrier(config)


def retrying(config: RetryConfig | None = None, **options: Any) -> Retrier:
    r"""Build a retrier from options.

    Invalid options are reported immediately, before any attempt is made.

    Args:
        config: Optional base configuration. ``options`` override its
            values.
        **options: The ``RetryConfig`` options. ``delays`` is accepted as
            an alias of ``delay``.

    Returns:
        The retrier.

    Raises:
        ConfigurationError: If an option is unknown or invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import retrying
        >>> retry = retrying(style="promise", delays=[0.01, 0.02], tries=3)
        >>> async def fetch(key):
        ...     return key.upper()
        ...
        >>> async def main():
        ...     return await retry(fetch, "success!")
        ...
        >>> asyncio.run(main())
        'SUCCESS!'

        ```
    """
    if "delays" in options:
        if options.get("delay") is not None:
            msg = "Only one of 'delay' and 'delays' may be given"
            raise ConfigurationError(msg)
        options["delay"] = options.pop("delays")
    unknown = sorted(set(options) - _OPTION_NAMES)
    if unknown:
        msg = f"Unknown option(s): {', '.join(unknown)}"
        raise ConfigurationError(msg)
    if config is None:
        return Retrier(RetryConfig(**options))
    return Retrier(config.merge(**options))
