"""
Provider-neutral dataclasses for client-side tool use.

They are intentionally minimal: everything provider-specific lives in adapters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable, Mapping, Optional

from .result import ResultItem

__all__ = ["ToolName", "ToolHandler", "ToolDeclaration", "ToolCallRequest"]


class ToolName(StrEnum):
    """The closed set of tools a request can offer the model."""

    SET_TIMECODES = "set_timecodes"
    SET_TIMECODES_WITH_OBJECTS = "set_timecodes_with_objects"
    SET_TIMECODES_WITH_NUMERIC_VALUES = "set_timecodes_with_numeric_values"


ToolHandler = Callable[[Mapping[str, Any]], list[ResultItem]]


@dataclass(frozen=True, slots=True)
class ToolDeclaration:
    """A tool offered to the model, paired with the local handler that serves it."""

    name: ToolName
    description: str
    parameters: Mapping[str, Any]
    handler: ToolHandler = field(compare=False, repr=False)


@dataclass(slots=True)
class ToolCallRequest:
    """A model-agnostic request emitted by the model to call a local tool."""

    id: Optional[str]
    name: str
    arguments: dict[str, Any]
