"""Shared fixtures: a scripted in-memory media service."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Iterable, Optional, Sequence

import pytest

from media_bridge.params import GenerationParams
from media_bridge.providers import BaseMediaService
from media_bridge.response import GenerationResponse
from media_bridge.types import (
    Asset,
    AssetHandle,
    ProcessingState,
    ToolCallRequest,
    ToolDeclaration,
)

PENDING = ProcessingState.PENDING
READY = ProcessingState.READY
FAILED = ProcessingState.FAILED


class ScriptedMediaService(BaseMediaService):
    """Replays scripted statuses and responses, recording every call."""

    def __init__(self) -> None:
        super().__init__(model="fake-model")
        self.submit_calls: list[tuple[bytes, str, str]] = []
        self.status_calls: list[str] = []
        self.generate_calls: list[tuple[str, tuple[ToolDeclaration, ...], AssetHandle, GenerationParams]] = []
        self.submit_error: Optional[Exception] = None
        self.status_error: Optional[Exception] = None
        self.generate_error: Optional[Exception] = None
        self._statuses: dict[str, deque[ProcessingState]] = {}
        self._responses: deque[GenerationResponse] = deque()
        self._generate_gates: deque[asyncio.Event] = deque()
        self.closed = False

    # --- scripting -------------------------------------------------------
    def script_status(self, name: str, states: Iterable[ProcessingState]) -> None:
        self._statuses[name] = deque(states)

    def script_response(self, *calls: ToolCallRequest, content: str = "") -> None:
        self._responses.append(GenerationResponse(content=content, tool_calls=list(calls)))

    def block_next_generate(self) -> asyncio.Event:
        gate = asyncio.Event()
        self._generate_gates.append(gate)
        return gate

    # --- BaseMediaService ------------------------------------------------
    async def submit_asset(self, data: bytes, mime_type: str, display_name: str) -> AssetHandle:
        self.submit_calls.append((data, mime_type, display_name))
        if self.submit_error is not None:
            raise self.submit_error
        name = f"files/{display_name}"
        return AssetHandle(
            name=name,
            uri=f"https://example.test/{name}",
            mime_type=mime_type,
            display_name=display_name,
        )

    async def query_asset_status(self, handle: AssetHandle) -> ProcessingState:
        self.status_calls.append(handle.name)
        if self.status_error is not None:
            raise self.status_error
        return self._statuses[handle.name].popleft()

    async def generate(
        self,
        prompt: str,
        tools: Sequence[ToolDeclaration],
        handle: AssetHandle,
        params: GenerationParams,
    ) -> GenerationResponse:
        self.generate_calls.append((prompt, tuple(tools), handle, params))
        if self.generate_error is not None:
            raise self.generate_error
        response = self._responses.popleft() if self._responses else GenerationResponse()
        if self._generate_gates:
            await self._generate_gates.popleft().wait()
        return response

    async def aclose(self) -> None:
        self.closed = True


class SleepRecorder:
    """Stands in for asyncio.sleep; records intervals without waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


def make_video(name: str = "clip.mp4", mime_type: str = "video/mp4") -> Asset:
    return Asset(data=b"\x00\x00\x00\x18ftypmp42", mime_type=mime_type, display_name=name)


def ready_handle(name: str = "files/clip.mp4") -> AssetHandle:
    return AssetHandle(
        name=name,
        uri=f"https://example.test/{name}",
        mime_type="video/mp4",
        state=READY,
    )


@pytest.fixture
def service() -> ScriptedMediaService:
    return ScriptedMediaService()


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()
