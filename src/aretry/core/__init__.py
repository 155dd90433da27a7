r"""Core shared logic used to validate retrier configuration."""

from __future__ import annotations

__all__ = [
    "validate_callable",
    "validate_jitter_range",
    "validate_non_negative",
    "validate_tries",
]

from aretry.core.validation import (
    validate_callable,
    validate_jitter_range,
    validate_non_negative,
    validate_tries,
)
