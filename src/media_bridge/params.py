"""Generation request parameters with utility methods."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from .config import DEFAULT_MODEL, DEFAULT_TEMPERATURE, Settings

__all__ = ["GenerationParams", "SYSTEM_INSTRUCTION"]

SYSTEM_INSTRUCTION = (
    "When given a video and a query, call the relevant function only once "
    "with the appropriate timecodes and text for the video"
)


@dataclass
class GenerationParams:
    """Parameters for a single generate-content request."""

    model: str = DEFAULT_MODEL
    system_instruction: str = SYSTEM_INSTRUCTION
    temperature: Optional[float] = DEFAULT_TEMPERATURE
    max_output_tokens: Optional[int] = None

    # Provider-specific parameters, forwarded to the request config as-is
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationParams":
        return cls(model=settings.model, temperature=settings.temperature)

    def as_dict(self, exclude_none: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary, optionally excluding None values.

        Args:
            exclude_none: If True, exclude fields with None values

        Returns:
            Dictionary representation of the params
        """
        result = asdict(self)
        if exclude_none:
            return {k: v for k, v in result.items() if v is not None}
        return result
