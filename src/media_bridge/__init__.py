"""
Media Bridge - upload a video, wait for it, and route the model's tool call.
"""

import logging

from ._exceptions import (
    AssetNotReadyError,
    ContractViolationError,
    DuplicateToolError,
    InvalidInputError,
    InvalidToolArgumentsError,
    MediaBridgeError,
    PipelineCancelledError,
    PollTimeoutError,
    ProcessingFailedError,
    TransportError,
)
from .client import GenerationClient
from .config import Provider, Settings, get_api_key
from .dispatcher import SelectionPolicy, ToolCallDispatcher
from .factory import create_service
from .modes import DEFAULT_MODES, get_mode
from .params import GenerationParams
from .poller import AssetReadinessPoller, CancellationToken, PollPolicy
from .prompts import PromptCompiler, PromptInput
from .providers import BaseMediaService, GeminiMediaService
from .registry import ToolRegistry
from .response import GenerationResponse
from .session import AnalysisSession, PipelineState, PipelineStatus
from .types import (
    Asset,
    AssetHandle,
    Mode,
    ProcessingState,
    ResultItem,
    ToolCallRequest,
    ToolDeclaration,
    ToolName,
)
from .uploader import AssetUploader

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "AnalysisSession",
    "Asset",
    "AssetHandle",
    "AssetNotReadyError",
    "AssetReadinessPoller",
    "AssetUploader",
    "BaseMediaService",
    "CancellationToken",
    "ContractViolationError",
    "DEFAULT_MODES",
    "DuplicateToolError",
    "GeminiMediaService",
    "GenerationClient",
    "GenerationParams",
    "GenerationResponse",
    "InvalidInputError",
    "InvalidToolArgumentsError",
    "MediaBridgeError",
    "Mode",
    "PipelineCancelledError",
    "PipelineState",
    "PipelineStatus",
    "PollPolicy",
    "PollTimeoutError",
    "ProcessingFailedError",
    "ProcessingState",
    "PromptCompiler",
    "PromptInput",
    "Provider",
    "ResultItem",
    "SelectionPolicy",
    "Settings",
    "ToolCallDispatcher",
    "ToolCallRequest",
    "ToolDeclaration",
    "ToolName",
    "ToolRegistry",
    "TransportError",
    "create_service",
    "get_api_key",
    "get_mode",
]
