from .asset import Asset, AssetHandle, ProcessingState, VIDEO_MIME_PREFIX
from .mode import Mode, PromptSource
from .result import ResultItem, timecode_to_seconds
from .tool import ToolCallRequest, ToolDeclaration, ToolHandler, ToolName

__all__ = [
    "Asset",
    "AssetHandle",
    "ProcessingState",
    "VIDEO_MIME_PREFIX",
    "Mode",
    "PromptSource",
    "ResultItem",
    "timecode_to_seconds",
    "ToolCallRequest",
    "ToolDeclaration",
    "ToolHandler",
    "ToolName",
]
