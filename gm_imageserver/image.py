"""Image value type."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO

from PIL import Image as PILImage, UnidentifiedImageError


@dataclass(frozen=True)
class Image:
    format: str
    data: bytes

    def __repr__(self) -> str:
        return f"Image(format={self.format!r}, data=<bytes:{len(self.data)}>)"


def detect_format(data: bytes) -> str | None:
    """Return the lower-case Pillow format name of ``data`` (``png``, ``jpeg``...)."""
    try:
        with PILImage.open(BytesIO(data)) as handle:
            fmt = handle.format
    except (UnidentifiedImageError, OSError):
        return None
    return fmt.lower() if fmt else None
