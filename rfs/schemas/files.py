"""File schemas — snapshot entries and listing metadata."""

from __future__ import annotations

import mimetypes
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(path: str | Path) -> str:
    """MIME type from the file extension, octet-stream when unknown."""
    content_type, _ = mimetypes.guess_type(str(path), strict=False)
    return content_type or DEFAULT_CONTENT_TYPE


class FileEntry(BaseModel):
    """One file of a snapshot. Equality is by path only."""

    model_config = ConfigDict(frozen=True)

    path: str  # URL-facing identifier, e.g. "files/cat.png"
    content_type: str = DEFAULT_CONTENT_TYPE
    size: int = Field(ge=0)
    location: Path = Field(exclude=True)  # Absolute on-disk path

    @classmethod
    def from_disk(cls, location: Path, segment: str) -> "FileEntry":
        """Open the file to read its size. Raises OSError if it can't be opened."""
        with open(location, "rb") as fh:
            size = os.fstat(fh.fileno()).st_size
        return cls(
            path=f"{segment}/{location.name}",
            content_type=guess_content_type(location),
            size=size,
            location=location,
        )

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def media_kind(self) -> str:
        """Top-level MIME type: image, audio, video, text, application..."""
        return self.content_type.split("/", 1)[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileEntry):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

