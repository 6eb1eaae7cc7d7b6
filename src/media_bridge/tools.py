"""
Local handlers for the timecode tools.

Each handler turns a validated tool call's argument mapping into a fresh list
of ResultItem objects; it never merges into earlier results.
"""

from __future__ import annotations

import numbers
from typing import Any, Final, Iterator, Mapping

from media_bridge._exceptions import InvalidToolArgumentsError
from media_bridge.types import ResultItem, ToolHandler, ToolName

__all__ = [
    "DEFAULT_HANDLERS",
    "normalize_text",
    "set_timecodes",
    "set_timecodes_with_numeric_values",
    "set_timecodes_with_objects",
]

_ESCAPED_APOSTROPHE: Final = "\\'"


def normalize_text(text: str) -> str:
    """Undo over-escaped apostrophes (``\\'``) the model sometimes emits."""
    return text.replace(_ESCAPED_APOSTROPHE, "'")


def _iter_timecodes(args: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
    timecodes = args.get("timecodes")
    if not isinstance(timecodes, list):
        raise InvalidToolArgumentsError(
            f"'timecodes' must be a list, got {type(timecodes).__name__}"
        )
    for idx, entry in enumerate(timecodes):
        if not isinstance(entry, Mapping):
            raise InvalidToolArgumentsError(f"timecodes[{idx}] is not an object")
        if not isinstance(entry.get("time"), str):
            raise InvalidToolArgumentsError(f"timecodes[{idx}] has no 'time' string")
        yield entry


def _text(entry: Mapping[str, Any], *, normalize: bool) -> str | None:
    text = entry.get("text")
    if text is None:
        return None
    text = str(text)
    return normalize_text(text) if normalize else text


def set_timecodes(args: Mapping[str, Any]) -> list[ResultItem]:
    return [
        ResultItem(time=entry["time"], text=_text(entry, normalize=True))
        for entry in _iter_timecodes(args)
    ]


def set_timecodes_with_objects(args: Mapping[str, Any]) -> list[ResultItem]:
    items: list[ResultItem] = []
    for entry in _iter_timecodes(args):
        objects = entry.get("objects")
        if objects is not None:
            if not isinstance(objects, list):
                raise InvalidToolArgumentsError(
                    f"'objects' at {entry['time']} must be a list"
                )
            objects = [str(obj) for obj in objects]
        items.append(
            ResultItem(
                time=entry["time"],
                text=_text(entry, normalize=True),
                objects=objects,
            )
        )
    return items


def set_timecodes_with_numeric_values(args: Mapping[str, Any]) -> list[ResultItem]:
    """Values and ordering are kept exactly as the model sent them."""
    items: list[ResultItem] = []
    for entry in _iter_timecodes(args):
        value = entry.get("value")
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, numbers.Real)
        ):
            raise InvalidToolArgumentsError(
                f"'value' at {entry['time']} must be a number, got {value!r}"
            )
        items.append(
            ResultItem(
                time=entry["time"],
                text=_text(entry, normalize=False),
                value=value,
            )
        )
    return items


DEFAULT_HANDLERS: Final[Mapping[ToolName, ToolHandler]] = {
    ToolName.SET_TIMECODES: set_timecodes,
    ToolName.SET_TIMECODES_WITH_OBJECTS: set_timecodes_with_objects,
    ToolName.SET_TIMECODES_WITH_NUMERIC_VALUES: set_timecodes_with_numeric_values,
}
