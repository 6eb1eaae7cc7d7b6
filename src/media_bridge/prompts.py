"""
Prompt compilation.

A templated mode with presets reads either the selected preset's fragment or
the user's custom text, whichever input was touched last: selecting a preset
hands priority back to the preset, and only focusing the custom field hands it
to the custom text. Typing alone does not change priority. Blank custom text
is rejected rather than sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from media_bridge.types import Mode

__all__ = ["PromptCompiler", "PromptInput", "UserInput", "compile_prompt"]


@dataclass
class PromptInput:
    """User-side prompt state for one mode."""

    sub_mode: Optional[str] = None
    custom_text: str = ""
    custom_focused: bool = False

    def select(self, sub_mode: str) -> None:
        """Pick a preset; the preset wins until the custom field is focused again."""
        self.sub_mode = sub_mode
        self.custom_focused = False

    def focus_custom(self) -> None:
        self.custom_focused = True

    def type_custom(self, text: str) -> None:
        self.custom_text = text


UserInput = Union[str, PromptInput, None]


class PromptCompiler:
    """Resolves a mode and the user's input into final prompt text. No I/O."""

    def compile(self, mode: Mode, user_input: UserInput = None) -> str:
        prompt = mode.prompt
        if isinstance(prompt, str):
            return prompt
        return prompt(self._template_input(mode, user_input))

    def _template_input(self, mode: Mode, user_input: UserInput) -> str:
        if user_input is None:
            user_input = PromptInput()
        if isinstance(user_input, str):
            return self._custom_text(mode, user_input)

        if not mode.has_sub_modes or user_input.custom_focused:
            return self._custom_text(mode, user_input.custom_text)

        sub_modes = mode.sub_modes
        sub_mode = user_input.sub_mode
        if sub_mode is None:
            # Nothing picked yet: the first preset is the default
            sub_mode = next(iter(sub_modes))
        try:
            return sub_modes[sub_mode]
        except KeyError:
            raise ValueError(
                f"Unknown sub-mode {sub_mode!r} for mode {mode.name!r}; "
                f"expected one of {list(sub_modes)}"
            ) from None

    @staticmethod
    def _custom_text(mode: Mode, text: str) -> str:
        if not text.strip():
            raise ValueError(f"Mode {mode.name!r} needs non-empty custom instructions")
        return text


_default_compiler = PromptCompiler()


def compile_prompt(mode: Mode, user_input: UserInput = None) -> str:
    """Module-level shortcut for ``PromptCompiler().compile``."""
    return _default_compiler.compile(mode, user_input)
