"""Image files selected for upload."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ImageUpload:
    """An image picked by the user, held in memory until it is sent."""

    filename: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: str | Path) -> "ImageUpload":
        """Read an image from disk, guessing its MIME type from the extension."""
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content=path.read_bytes(),
            content_type=content_type or "application/octet-stream",
        )

    def as_file(self) -> tuple[str, bytes, str]:
        """Tuple form accepted by httpx ``files=``."""
        return (self.filename, self.content, self.content_type)
