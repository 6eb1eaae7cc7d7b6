"""Assets and the remote handles they turn into once submitted."""
from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Optional

__all__ = ["Asset", "AssetHandle", "ProcessingState", "VIDEO_MIME_PREFIX"]

VIDEO_MIME_PREFIX = "video/"


class ProcessingState(StrEnum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Asset:
    """A local binary payload awaiting upload."""

    data: bytes
    mime_type: str
    display_name: str

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith(VIDEO_MIME_PREFIX)

    @classmethod
    def from_path(cls, path: str | Path, mime_type: Optional[str] = None) -> "Asset":
        """
        Read a local file into an Asset.

        Args:
            path: File to read.
            mime_type: Overrides the type guessed from the file name.
        """
        path = Path(path)
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            data=path.read_bytes(),
            mime_type=mime_type or "application/octet-stream",
            display_name=path.name,
        )

    def __repr__(self) -> str:
        return (
            f"Asset(display_name={self.display_name!r}, "
            f"mime_type={self.mime_type!r}, size={len(self.data)})"
        )


@dataclass(slots=True)
class AssetHandle:
    """Opaque remote identifier for an uploaded asset plus its processing state."""

    name: str
    uri: str
    mime_type: str
    display_name: str = ""
    state: ProcessingState = ProcessingState.PENDING

    @property
    def is_ready(self) -> bool:
        return self.state is ProcessingState.READY
