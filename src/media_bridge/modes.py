"""
Built-in analysis modes.

The catalog is built once at import time and exposed through a read-only
mapping keyed by mode name.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

from media_bridge.types import Mode, ToolName

__all__ = ["CHART_MODE", "CUSTOM_MODE", "DEFAULT_MODES", "get_mode"]

CUSTOM_MODE: Final = "Custom"
CHART_MODE: Final = "Chart"


def _custom_prompt(instructions: str) -> str:
    return (
        "Call set_timecodes once using the following instructions: "
        f"{instructions}"
    )


def _chart_prompt(instructions: str) -> str:
    return (
        "Generate chart data for this video based on the following instructions: "
        f"{instructions}. Call set_timecodes_with_numeric_values once with the "
        "list of data values and timecodes."
    )


_MODES: tuple[Mode, ...] = (
    Mode(
        name="A/V captions",
        prompt=(
            "For each scene in this video, generate captions that describe the "
            "scene along with any spoken text placed in quotation marks. Place "
            "each caption into an object sent to set_timecodes with the timecode "
            "of the caption in the video."
        ),
        tool=ToolName.SET_TIMECODES,
    ),
    Mode(
        name="Paragraph",
        prompt=(
            "Generate a paragraph that summarizes this video. Keep it to 3 to 5 "
            "sentences. Place each sentence of the summary into an object sent "
            "to set_timecodes with the timecode of the sentence in the video."
        ),
        tool=ToolName.SET_TIMECODES,
    ),
    Mode(
        name="Key moments",
        prompt=(
            "Generate bullet points for the video. Place each bullet point into "
            "an object sent to set_timecodes with the timecode of the bullet "
            "point in the video."
        ),
        tool=ToolName.SET_TIMECODES,
    ),
    Mode(
        name="Table",
        prompt=(
            "Choose 5 key shots from this video and call "
            "set_timecodes_with_objects with the timecode, text description of "
            "10 words or less, and a list of objects visible in the scene (with "
            "representative emojis)."
        ),
        tool=ToolName.SET_TIMECODES_WITH_OBJECTS,
    ),
    Mode(
        name="Haiku",
        prompt=(
            "Generate a haiku for the video. Place each line of the haiku into "
            "an object sent to set_timecodes with the timecode of the line in "
            "the video. Make sure to follow the syllable count rules (5-7-5)."
        ),
        tool=ToolName.SET_TIMECODES,
    ),
    Mode(
        name=CHART_MODE,
        prompt=_chart_prompt,
        tool=ToolName.SET_TIMECODES_WITH_NUMERIC_VALUES,
        sub_modes=MappingProxyType(
            {
                "Excitement": (
                    "for each scene, estimate the level of excitement on a scale "
                    "of 1 to 10"
                ),
                "Importance": (
                    "for each scene, estimate the level of overall importance to "
                    "the video on a scale of 1 to 10"
                ),
                "Number of people": "for each scene, count the number of people visible",
            }
        ),
    ),
    Mode(
        name=CUSTOM_MODE,
        prompt=_custom_prompt,
        tool=ToolName.SET_TIMECODES,
    ),
)

DEFAULT_MODES: Final[Mapping[str, Mode]] = MappingProxyType({m.name: m for m in _MODES})


def get_mode(name: str, modes: Mapping[str, Mode] = DEFAULT_MODES) -> Mode:
    """Look up a mode by name, raising KeyError with the known names."""
    try:
        return modes[name]
    except KeyError:
        raise KeyError(f"Unknown mode {name!r}; expected one of {sorted(modes)}") from None
