from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Union

from .tool import ToolName

__all__ = ["Mode", "PromptSource"]

PromptSource = Union[str, Callable[[str], str]]


@dataclass(frozen=True, slots=True)
class Mode:
    """
    A named analysis configuration.

    Attributes:
        name: Display name, also the catalog key.
        prompt: Fixed prompt text, or a template called with the user's input.
        tool: The tool the model is expected to call for this mode.
        sub_modes: Canned prompt fragments keyed by preset name, for modes
                   whose template takes a preset or custom input.
    """

    name: str
    prompt: PromptSource
    tool: ToolName
    sub_modes: Optional[Mapping[str, str]] = None

    @property
    def is_templated(self) -> bool:
        return callable(self.prompt)

    @property
    def has_sub_modes(self) -> bool:
        return bool(self.sub_modes)
