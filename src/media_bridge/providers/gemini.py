from __future__ import annotations

import io
import logging
from typing import Optional, Self, Sequence

from google import genai
from google.genai import types

from media_bridge.adapters import GeminiRequestAdapter
from media_bridge.config import DEFAULT_MODEL
from media_bridge.params import GenerationParams
from media_bridge.response import GenerationResponse
from media_bridge.types import AssetHandle, ProcessingState, ToolDeclaration

from .base import BaseMediaService

__all__ = ["GeminiMediaService"]


class GeminiMediaService(BaseMediaService):
    """
    Gemini Files API plus generate-content, on the async ``google-genai`` client.

    Use ``GeminiMediaService.from_client`` when you already have a ``genai.Client``.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        *,
        api_key: str,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(model=model, logger=logger, name=name)
        http_options = None
        if timeout is not None:
            # google-genai takes milliseconds
            http_options = types.HttpOptions(timeout=int(timeout * 1000))
        self._client = genai.Client(api_key=api_key, http_options=http_options)
        self._adapter = GeminiRequestAdapter()

    # Alternate constructor
    @classmethod
    def from_client(
        cls,
        model: str,
        client: genai.Client,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> Self:
        """Wrap an existing, already configured ``genai.Client``."""
        if not isinstance(client, genai.Client):
            raise TypeError(
                f"GeminiMediaService.from_client expects genai.Client; got {type(client).__name__}"
            )

        self = cls.__new__(cls)  # bypass __init__
        BaseMediaService.__init__(self, model=model, logger=logger, name=name)
        self._client = client
        self._adapter = GeminiRequestAdapter()
        return self

    @property
    def adapter(self) -> GeminiRequestAdapter:
        return self._adapter

    async def submit_asset(
        self, data: bytes, mime_type: str, display_name: str
    ) -> AssetHandle:
        self._log(f"Uploading {display_name!r} ({mime_type}, {len(data)} bytes)")
        uploaded = await self._client.aio.files.upload(
            file=io.BytesIO(data),
            config=types.UploadFileConfig(
                mime_type=mime_type,
                display_name=display_name,
            ),
        )
        handle = self._adapter.to_handle(uploaded, fallback_mime_type=mime_type)
        self._log(f"Uploaded as {handle.name} (state: {handle.state})")
        return handle

    async def query_asset_status(self, handle: AssetHandle) -> ProcessingState:
        file = await self._client.aio.files.get(name=handle.name)
        if file.uri:
            handle.uri = file.uri
        state = self._adapter.to_state(file)
        self._log(f"{handle.name} status: {file.state} -> {state}", logging.DEBUG)
        return state

    async def generate(
        self,
        prompt: str,
        tools: Sequence[ToolDeclaration],
        handle: AssetHandle,
        params: GenerationParams,
    ) -> GenerationResponse:
        model = params.model or self.model
        self._log(f"Sending request to Gemini model {model} ({len(tools)} tools)")
        raw = await self._client.aio.models.generate_content(
            model=model,
            contents=self._adapter.build_contents(prompt, handle),
            config=self._adapter.build_config(params, tools),
        )
        return self._adapter.from_provider(raw)

    async def aclose(self) -> None:
        close = getattr(self._client.aio, "aclose", None)
        if close:
            await close()
