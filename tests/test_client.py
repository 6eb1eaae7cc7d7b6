"""Tests for the generation client."""

import pytest

from conftest import ready_handle
from media_bridge import (
    AssetNotReadyError,
    GenerationClient,
    GenerationParams,
    ToolCallRequest,
    ToolRegistry,
    TransportError,
)
from media_bridge.params import SYSTEM_INSTRUCTION
from media_bridge.tools import DEFAULT_HANDLERS
from media_bridge.types import AssetHandle, ProcessingState


@pytest.fixture
def tools():
    return ToolRegistry().declare(DEFAULT_HANDLERS)


class TestGenerationClient:
    @pytest.mark.asyncio
    async def test_single_request_with_fixed_settings(self, service, tools):
        service.script_response(ToolCallRequest(id="c1", name="set_timecodes", arguments={}))
        client = GenerationClient(service)
        handle = ready_handle()

        response = await client.generate("describe it", tools, handle)

        assert [c.name for c in response.tool_calls] == ["set_timecodes"]
        (prompt, sent_tools, sent_handle, params) = service.generate_calls[0]
        assert len(service.generate_calls) == 1
        assert prompt == "describe it"
        assert sent_tools == tools
        assert sent_handle is handle
        assert params.temperature == 0.5
        assert params.system_instruction == SYSTEM_INSTRUCTION
        assert params.model == "fake-model"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("state", [ProcessingState.PENDING, ProcessingState.FAILED])
    async def test_refuses_handles_that_are_not_ready(self, service, tools, state):
        client = GenerationClient(service)
        handle = AssetHandle(name="files/x", uri="", mime_type="video/mp4", state=state)

        with pytest.raises(AssetNotReadyError):
            await client.generate("p", tools, handle)

        assert service.generate_calls == []

    @pytest.mark.asyncio
    async def test_transport_failure_is_not_retried(self, service, tools):
        service.generate_error = ConnectionError("offline")
        client = GenerationClient(service)

        with pytest.raises(TransportError):
            await client.generate("p", tools, ready_handle())

        assert len(service.generate_calls) == 1


class TestGenerationParams:
    def test_defaults(self):
        params = GenerationParams()
        assert params.temperature == 0.5
        assert "call the relevant function only once" in params.system_instruction

    def test_as_dict_excludes_none(self):
        assert "max_output_tokens" not in GenerationParams().as_dict()
        assert GenerationParams().as_dict(exclude_none=False)["max_output_tokens"] is None
