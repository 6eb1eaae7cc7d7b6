"""
Tool declarations offered to the model.

The schema table below is the single source for what each ToolName looks like
on the wire; `ToolRegistry.declare` pairs those schemas 1:1 with local handlers.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Final, Iterable, Mapping, Optional, Union

from media_bridge._exceptions import ContractViolationError, DuplicateToolError
from media_bridge.types import ToolDeclaration, ToolHandler, ToolName

__all__ = ["TOOL_SCHEMAS", "ToolRegistry"]


def _timecodes_param(item_properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "timecodes": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": item_properties,
                    "required": required,
                },
            },
        },
        "required": ["timecodes"],
    }


# name -> (description, parameters)
TOOL_SCHEMAS: Final[Mapping[ToolName, tuple[str, Mapping[str, Any]]]] = MappingProxyType(
    {
        ToolName.SET_TIMECODES: (
            "Set the timecodes for the video with associated text",
            _timecodes_param(
                {"time": {"type": "string"}, "text": {"type": "string"}},
                ["time", "text"],
            ),
        ),
        ToolName.SET_TIMECODES_WITH_OBJECTS: (
            "Set the timecodes for the video with associated text and object list",
            _timecodes_param(
                {
                    "time": {"type": "string"},
                    "text": {"type": "string"},
                    "objects": {"type": "array", "items": {"type": "string"}},
                },
                ["time", "text", "objects"],
            ),
        ),
        ToolName.SET_TIMECODES_WITH_NUMERIC_VALUES: (
            "Set the timecodes for the video with associated numeric values",
            _timecodes_param(
                {"time": {"type": "string"}, "value": {"type": "number"}},
                ["time", "value"],
            ),
        ),
    }
)

_Name = Union[ToolName, str]
ToolSpec = Union[Mapping[_Name, ToolHandler], Iterable[tuple[_Name, ToolHandler]]]


def _resolve_name(name: Union[ToolName, str]) -> ToolName:
    try:
        return ToolName(name)
    except ValueError:
        raise ContractViolationError(f"Unknown tool name: {name!r}") from None


class ToolRegistry:
    """Builds the fixed tool set for one request."""

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def declare(self, tools: ToolSpec) -> tuple[ToolDeclaration, ...]:
        """
        Pair every named handler with its schema.

        Args:
            tools: Mapping of tool name to handler, or an iterable of
                   ``(name, handler)`` pairs.

        Returns:
            Immutable tuple of declarations, in the order given.

        Raises:
            ContractViolationError: A name is not a known ToolName.
            DuplicateToolError: Two handlers share a name.
        """
        pairs = tools.items() if isinstance(tools, Mapping) else tools

        declarations: dict[ToolName, ToolDeclaration] = {}
        for raw_name, handler in pairs:
            name = _resolve_name(raw_name)
            if name in declarations:
                raise DuplicateToolError(f"Tool {name.value!r} declared more than once")
            if not callable(handler):
                raise ContractViolationError(f"Handler for {name.value!r} is not callable")
            description, parameters = TOOL_SCHEMAS[name]
            declarations[name] = ToolDeclaration(
                name=name,
                description=description,
                parameters=parameters,
                handler=handler,
            )

        self.logger.debug(
            "[%s] Declared tools: %s",
            self.__class__.__name__,
            ", ".join(name.value for name in declarations),
        )
        return tuple(declarations.values())
