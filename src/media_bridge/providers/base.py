"""Base class for remote media services."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from media_bridge.params import GenerationParams
from media_bridge.response import GenerationResponse
from media_bridge.types import AssetHandle, ProcessingState, ToolDeclaration

__all__ = ["BaseMediaService"]


class BaseMediaService(ABC):
    """
    The remote side of the pipeline, seen as an opaque three-call API:
    submit an asset, query its processing status, generate content.

    Implementations let SDK and network exceptions propagate; callers
    translate them into TransportError.
    """

    def __init__(
        self,
        model: str,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        """
        Initializes the base media service.

        Args:
            model: Default model identifier used for generation.
            logger: Optional logger instance. If None, a logger named after
                    this module will be used.
            name: Optional name for this component, used in logging.
                  If None, defaults to the concrete class's name.
        """
        self.model = model
        self.logger = logger or logging.getLogger(__name__)
        self.name = name if name is not None else self.__class__.__name__

    @abstractmethod
    async def submit_asset(
        self, data: bytes, mime_type: str, display_name: str
    ) -> AssetHandle:
        """Upload a payload; returns once the store acknowledges receipt."""
        ...

    @abstractmethod
    async def query_asset_status(self, handle: AssetHandle) -> ProcessingState:
        """Return the current processing state of an uploaded asset."""
        ...

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        tools: Sequence[ToolDeclaration],
        handle: AssetHandle,
        params: GenerationParams,
    ) -> GenerationResponse:
        """
        Send one generation request over the prompt and the referenced asset,
        offering ``tools`` as the complete set of callable functions.
        """
        ...

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")

    # --- lifecycle ---------------------------------------------------------
    async def aclose(self) -> None:
        """Release network resources. Safe to call multiple times."""

    async def __aenter__(self) -> "BaseMediaService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
