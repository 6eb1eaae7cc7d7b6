from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from media_bridge.types import ToolCallRequest


@dataclass
class GenerationResponse:
    """Unified response object for a generate-content call."""

    content: str = ""
    tool_calls: list[ToolCallRequest] = field(default_factory=list)
    raw: Any = None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)
