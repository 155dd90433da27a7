r"""Calling-convention adapters.

The input side invokes the retried operation either with a trailing
completion callback ("node") or expecting an awaitable / future back
("promise"). The output side delivers the retrier outcome to its caller
in either convention.
"""

from __future__ import annotations

__all__ = [
    "NODE",
    "PROMISE",
    "Convention",
    "NodeInput",
    "NodeOutput",
    "PromiseInput",
    "PromiseOutput",
    "resolve_convention",
]

from aretry.conventions.base import NODE, PROMISE, Convention, resolve_convention
from aretry.conventions.node import NodeInput, NodeOutput
from aretry.conventions.promise import PromiseInput, PromiseOutput
