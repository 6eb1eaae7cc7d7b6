"""
Generation client: one request per call, no retries.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from media_bridge._exceptions import TRANSPORT_ERRORS, AssetNotReadyError, classify_error
from media_bridge.params import GenerationParams
from media_bridge.providers import BaseMediaService
from media_bridge.response import GenerationResponse
from media_bridge.types import AssetHandle, ToolDeclaration

__all__ = ["GenerationClient"]


class GenerationClient:
    """Combines prompt text, an asset reference and tool declarations into one request."""

    def __init__(
        self,
        service: BaseMediaService,
        *,
        params: Optional[GenerationParams] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        self.service = service
        self.params = params or GenerationParams(model=service.model)
        self.logger = logger or logging.getLogger(__name__)
        self.name = name or self.__class__.__name__

    async def generate(
        self,
        prompt: str,
        tools: Sequence[ToolDeclaration],
        asset: AssetHandle,
    ) -> GenerationResponse:
        """
        Send the request and return the raw, unvalidated response.

        ``tools`` is passed as the complete and only function set.

        Raises:
            AssetNotReadyError: ``asset`` is not READY.
            TransportError: The request could not be completed.
        """
        if not asset.is_ready:
            raise AssetNotReadyError(
                f"Asset {asset.name!r} is {asset.state}, not ready for generation"
            )

        declared = tuple(tools)
        self._log(
            f"Generating with {len(declared)} tools "
            f"(temperature={self.params.temperature})",
            logging.DEBUG,
        )
        try:
            response = await self.service.generate(prompt, declared, asset, self.params)
        except TRANSPORT_ERRORS as exc:
            raise classify_error(exc, self.logger) from exc

        self._log(f"Response carried {len(response.tool_calls)} tool calls", logging.DEBUG)
        return response

    def _log(self, message: str, level: int = logging.INFO) -> None:
        self.logger.log(level, f"[{self.name}] {message}")
