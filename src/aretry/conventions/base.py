r"""Resolution of calling-convention options."""

from __future__ import annotations

__all__ = ["NODE", "PROMISE", "Convention", "resolve_convention"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from aretry.conventions.node import NodeInput, NodeOutput
from aretry.conventions.promise import PromiseInput, PromiseOutput
from aretry.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable

NODE = "node"
PROMISE = "promise"

InputAdapter = Union[NodeInput, PromiseInput]
OutputAdapter = Union[NodeOutput, PromiseOutput]


@dataclass(frozen=True)
class Convention:
    """A resolved calling convention.

    Attributes:
        kind: Either ``"node"`` or ``"promise"``.
        future_factory: Optional factory creating the futures returned
            by a promise-style retrier.
    """

    kind: str
    future_factory: Callable[[], Any] | None = None

    def input_adapter(self) -> InputAdapter:
        """Return the adapter invoking operations in this convention."""
        if self.kind == NODE:
            return NodeInput()
        return PromiseInput()

    def output_adapter(self) -> OutputAdapter:
        """Return the adapter delivering outcomes in this convention."""
        if self.kind == NODE:
            return NodeOutput()
        return PromiseOutput(self.future_factory)


def resolve_convention(value: Any, *, name: str = "style") -> Convention:
    """Resolve a convention option.

    Args:
        value: ``"node"``, ``"promise"`` or a zero-argument future
            factory such as ``concurrent.futures.Future``.
        name: The option name used in the error message.

    Returns:
        The resolved convention.

    Raises:
        ConfigurationError: If ``value`` is not a valid convention.

    Example:
        ```pycon
        >>> import concurrent.futures
        >>> from aretry.conventions import resolve_convention
        >>> resolve_convention("node")
        Convention(kind='node', future_factory=None)
        >>> resolve_convention(concurrent.futures.Future).kind
        'promise'

        ```
    """
    if isinstance(value, str):
        if value in (NODE, PROMISE):
            return Convention(value)
    elif callable(value):
        return Convention(PROMISE, value)
    msg = f"Invalid {name} (must be 'node', 'promise' or a future factory): {value!r}"
    raise ConfigurationError(msg)
