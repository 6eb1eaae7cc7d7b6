"""Gemini adapter for pure request/response transformations."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from google.genai import types

from media_bridge.params import GenerationParams
from media_bridge.response import GenerationResponse
from media_bridge.types import (
    AssetHandle,
    ProcessingState,
    ToolCallRequest,
    ToolDeclaration,
)

__all__ = ["GeminiRequestAdapter"]

_STATE_MAP: dict[types.FileState, ProcessingState] = {
    types.FileState.ACTIVE: ProcessingState.READY,
    types.FileState.FAILED: ProcessingState.FAILED,
}


def _to_schema(spec: Mapping[str, Any]) -> types.Schema:
    """Convert a JSON-schema style mapping into a Gemini Schema."""
    kwargs: dict[str, Any] = {"type": types.Type(str(spec["type"]).upper())}
    if "description" in spec:
        kwargs["description"] = spec["description"]
    if "enum" in spec:
        kwargs["enum"] = list(spec["enum"])
    if "properties" in spec:
        kwargs["properties"] = {
            key: _to_schema(value) for key, value in spec["properties"].items()
        }
    if "items" in spec:
        kwargs["items"] = _to_schema(spec["items"])
    if "required" in spec:
        kwargs["required"] = list(spec["required"])
    return types.Schema(**kwargs)


class GeminiRequestAdapter:
    """Adapter for converting between generic format and Gemini format."""

    def build_tools(self, declarations: Sequence[ToolDeclaration]) -> list[types.Tool]:
        """All declarations go into one Tool so they form the only function set."""
        return [
            types.Tool(
                function_declarations=[
                    types.FunctionDeclaration(
                        name=decl.name.value,
                        description=decl.description,
                        parameters=_to_schema(decl.parameters),
                    )
                    for decl in declarations
                ]
            )
        ]

    def build_contents(self, prompt: str, handle: AssetHandle) -> list[types.Content]:
        return [
            types.Content(
                role="user",
                parts=[
                    types.Part(text=prompt),
                    types.Part(
                        file_data=types.FileData(
                            file_uri=handle.uri,
                            mime_type=handle.mime_type,
                        )
                    ),
                ],
            )
        ]

    def build_config(
        self,
        params: GenerationParams,
        declarations: Sequence[ToolDeclaration],
    ) -> types.GenerateContentConfig:
        config_kwargs: dict[str, Any] = {
            "system_instruction": params.system_instruction,
            "tools": self.build_tools(declarations),
            # Tool calls are dispatched locally, never by the SDK
            "automatic_function_calling": types.AutomaticFunctionCallingConfig(
                disable=True
            ),
        }
        if params.temperature is not None:
            config_kwargs["temperature"] = params.temperature
        if params.max_output_tokens is not None:
            config_kwargs["max_output_tokens"] = params.max_output_tokens
        for key, value in params.extra.items():
            config_kwargs.setdefault(key, value)
        return types.GenerateContentConfig(**config_kwargs)

    def to_state(self, file: types.File) -> ProcessingState:
        """Map a Files API state; anything not terminal counts as pending."""
        if file.state is None:
            return ProcessingState.PENDING
        return _STATE_MAP.get(file.state, ProcessingState.PENDING)

    def to_handle(self, file: types.File, *, fallback_mime_type: str = "") -> AssetHandle:
        if not file.name:
            raise ValueError("Uploaded file has no name")
        return AssetHandle(
            name=file.name,
            uri=file.uri or "",
            mime_type=file.mime_type or fallback_mime_type,
            display_name=file.display_name or "",
            state=self.to_state(file),
        )

    def from_provider(self, raw: types.GenerateContentResponse) -> GenerationResponse:
        """Convert a Gemini response to a unified GenerationResponse."""
        text_parts: list[str] = []
        tool_calls: list[ToolCallRequest] = []

        candidates = raw.candidates or []
        content = candidates[0].content if candidates else None
        for part in (content.parts or []) if content else []:
            if part.function_call is not None:
                call = part.function_call
                tool_calls.append(
                    ToolCallRequest(
                        id=call.id,
                        name=call.name or "",
                        arguments=dict(call.args or {}),
                    )
                )
            elif part.text and not part.thought:
                text_parts.append(part.text)

        return GenerationResponse(
            content="".join(text_parts),
            tool_calls=tool_calls,
            raw=raw,
        )
