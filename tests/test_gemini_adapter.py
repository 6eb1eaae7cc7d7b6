"""Tests for the Gemini request adapter and the error classifier."""

import pytest
from google.genai import errors as genai_errors
from google.genai import types

from conftest import ready_handle
from media_bridge import GenerationParams, ProcessingState, ToolRegistry, TransportError
from media_bridge._exceptions import classify_error
from media_bridge.adapters import GeminiRequestAdapter
from media_bridge.tools import DEFAULT_HANDLERS


@pytest.fixture
def adapter():
    return GeminiRequestAdapter()


@pytest.fixture
def tools():
    return ToolRegistry().declare(DEFAULT_HANDLERS)


class TestRequestBuilding:
    def test_config_carries_instruction_temperature_and_tools(self, adapter, tools):
        config = adapter.build_config(GenerationParams(), tools)

        assert config.temperature == 0.5
        assert "only once" in config.system_instruction
        assert config.automatic_function_calling.disable is True
        (tool,) = config.tools
        assert [fd.name for fd in tool.function_declarations] == [
            "set_timecodes",
            "set_timecodes_with_objects",
            "set_timecodes_with_numeric_values",
        ]

    def test_schema_conversion(self, adapter, tools):
        (tool,) = adapter.build_tools(tools[2:])
        (decl,) = tool.function_declarations

        params = decl.parameters
        assert params.type == types.Type.OBJECT
        items = params.properties["timecodes"].items
        assert params.properties["timecodes"].type == types.Type.ARRAY
        assert items.properties["value"].type == types.Type.NUMBER
        assert items.required == ["time", "value"]

    def test_extra_params_are_forwarded(self, adapter, tools):
        config = adapter.build_config(GenerationParams(extra={"top_k": 4}), tools)
        assert config.top_k == 4

    def test_contents_reference_the_uploaded_file(self, adapter):
        handle = ready_handle()

        (content,) = adapter.build_contents("what happens?", handle)

        assert content.role == "user"
        assert content.parts[0].text == "what happens?"
        assert content.parts[1].file_data.file_uri == handle.uri
        assert content.parts[1].file_data.mime_type == "video/mp4"


class TestResponseParsing:
    def test_function_calls_in_order(self, adapter):
        raw = types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(
                        role="model",
                        parts=[
                            types.Part(text="Here you go. "),
                            types.Part(
                                function_call=types.FunctionCall(
                                    name="set_timecodes",
                                    args={"timecodes": [{"time": "00:01", "text": "hi"}]},
                                )
                            ),
                            types.Part(function_call=types.FunctionCall(name="set_timecodes_with_objects", args={})),
                        ],
                    )
                )
            ]
        )

        response = adapter.from_provider(raw)

        assert response.content == "Here you go. "
        assert [c.name for c in response.tool_calls] == ["set_timecodes", "set_timecodes_with_objects"]
        assert response.tool_calls[0].arguments == {"timecodes": [{"time": "00:01", "text": "hi"}]}
        assert response.raw is raw

    def test_empty_response(self, adapter):
        response = adapter.from_provider(types.GenerateContentResponse())
        assert response.tool_calls == []
        assert response.content == ""


class TestFileMapping:
    @pytest.mark.parametrize(
        "file_state, expected",
        [
            (types.FileState.ACTIVE, ProcessingState.READY),
            (types.FileState.FAILED, ProcessingState.FAILED),
            (types.FileState.PROCESSING, ProcessingState.PENDING),
            (types.FileState.STATE_UNSPECIFIED, ProcessingState.PENDING),
            (None, ProcessingState.PENDING),
        ],
    )
    def test_to_state(self, adapter, file_state, expected):
        assert adapter.to_state(types.File(name="files/a", state=file_state)) is expected

    def test_to_handle(self, adapter):
        file = types.File(
            name="files/abc",
            uri="https://generativelanguage.googleapis.com/v1beta/files/abc",
            display_name="clip.mp4",
            state=types.FileState.PROCESSING,
        )

        handle = adapter.to_handle(file, fallback_mime_type="video/mp4")

        assert handle.name == "files/abc"
        assert handle.mime_type == "video/mp4"
        assert handle.state is ProcessingState.PENDING


class TestClassifyError:
    def test_rate_limit(self):
        exc = genai_errors.ClientError(429, {"error": {"message": "quota", "status": "RESOURCE_EXHAUSTED"}})
        wrapped = classify_error(exc)
        assert isinstance(wrapped, TransportError)
        assert wrapped.original_exc is exc
        assert str(wrapped).startswith("Rate-limit exceeded")

    def test_server_error(self):
        exc = genai_errors.ServerError(503, {"error": {"message": "overloaded", "status": "UNAVAILABLE"}})
        assert "internal error (503)" in str(classify_error(exc))

    def test_client_error(self):
        exc = genai_errors.ClientError(403, {"error": {"message": "denied", "status": "PERMISSION_DENIED"}})
        assert "rejected" in str(classify_error(exc))
