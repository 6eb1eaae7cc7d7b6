from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

__all__ = ["ResultItem", "timecode_to_seconds"]

Number = Union[int, float]


def timecode_to_seconds(timecode: str) -> float:
    """
    Convert an ``HH:MM:SS``, ``MM:SS`` or ``SS`` timecode to seconds.

    >>> timecode_to_seconds("01:02:03.5")
    3723.5
    """
    parts = timecode.strip().split(":")
    if not 1 <= len(parts) <= 3:
        raise ValueError(f"Malformed timecode: {timecode!r}")
    try:
        values = [float(part) for part in parts]
    except ValueError:
        raise ValueError(f"Malformed timecode: {timecode!r}") from None

    seconds = 0.0
    for value in values:
        seconds = seconds * 60 + value
    return seconds


@dataclass(frozen=True, slots=True)
class ResultItem:
    """One normalized unit of analysis output."""

    time: str
    text: Optional[str] = None
    objects: Optional[list[str]] = None
    value: Optional[Number] = None

    @property
    def seconds(self) -> float:
        return timecode_to_seconds(self.time)
