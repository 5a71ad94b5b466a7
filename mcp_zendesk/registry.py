"""Tool registry: unique names, dispatch, and binding to FastMCP."""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field
from starlette.concurrency import run_in_threadpool

from .tools import ToolOperation

logger = logging.getLogger(__name__)


def _tool_function(operation: ToolOperation) -> Callable[..., Awaitable[CallToolResult]]:
    """Expose an operation as a coroutine with one keyword argument per model field.

    FastMCP derives the tool's input schema from the function signature, so
    the arguments stay flat (``{"id": 5, "name": "X"}``) instead of being
    nested under a single model parameter. The blocking Zendesk call runs in
    the worker thread pool so concurrent tool calls do not wait on each other.
    """

    async def call(**arguments: Any) -> CallToolResult:
        return await run_in_threadpool(operation.invoke, arguments)

    parameters = [
        inspect.Parameter(
            name,
            inspect.Parameter.KEYWORD_ONLY,
            annotation=Annotated[(field.annotation, *field.metadata, Field(description=field.description))],
            default=inspect.Parameter.empty if field.is_required() else field.default,
        )
        for name, field in operation.params_model.model_fields.items()
    ]
    call.__name__ = operation.name
    call.__qualname__ = operation.name
    call.__doc__ = operation.description
    call.__signature__ = inspect.Signature(parameters, return_annotation=CallToolResult)  # type: ignore[attr-defined]
    call.__annotations__ = {p.name: p.annotation for p in parameters} | {"return": CallToolResult}
    return call


class ToolRegistry:
    """Registered tool operations keyed by unique name."""

    def __init__(self, mcp: FastMCP | None = None) -> None:
        """Initialize the registry.

        Args:
            mcp: FastMCP server to bind operations to; None keeps them local
        """
        self.mcp = mcp
        self._operations: dict[str, ToolOperation] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __len__(self) -> int:
        return len(self._operations)

    @property
    def names(self) -> list[str]:
        """Operation names in registration order."""
        return list(self._operations)

    def get(self, name: str) -> ToolOperation:
        """Look up an operation by name.

        Raises:
            KeyError: If no operation has that name
        """
        try:
            return self._operations[name]
        except KeyError:
            raise KeyError(f"Unknown tool: {name}") from None

    def register(self, operations: Iterable[ToolOperation]) -> None:
        """Register a group of operations.

        The group is checked for name clashes before anything is added, so a
        rejected group leaves the registry unchanged.

        Raises:
            ValueError: If a name is already registered or repeated in the group
        """
        batch = list(operations)
        seen: set[str] = set()
        for op in batch:
            if op.name in self._operations or op.name in seen:
                raise ValueError(f"Tool '{op.name}' is already registered")
            seen.add(op.name)

        for op in batch:
            if self.mcp is not None:
                self.mcp.add_tool(
                    _tool_function(op),
                    name=op.name,
                    title=op.title,
                    description=op.description,
                    annotations=op.annotations,
                    structured_output=False,
                )
            self._operations[op.name] = op

    def call(self, name: str, arguments: dict[str, Any] | None = None) -> CallToolResult:
        """Validate arguments and run the named operation.

        Raises:
            KeyError: If no operation has that name
            pydantic.ValidationError: If the arguments do not match the schema
        """
        operation = self.get(name)
        logger.debug("Calling tool %s", name)
        return operation.invoke(arguments or {})
