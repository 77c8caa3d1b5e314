"""Source that loads images from a directory on disk."""

from __future__ import annotations

from pathlib import Path

from ..errors import ImageError, ParamError
from ..image import Image, detect_format
from ..params import Params

SOURCE_PARAM = "source"


class FileSource:
    """Reads ``<root>/<source>``; the format is sniffed with Pillow."""

    name = "file"

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()

    def get(self, params: Params) -> Image:
        relative = params.get_string(SOURCE_PARAM)
        path = (self.root / relative).resolve()
        if not path.is_relative_to(self.root):
            raise ParamError(SOURCE_PARAM, "must stay inside the source directory")
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise ImageError(f"source {relative!r} not found") from exc
        except OSError as exc:
            raise ImageError(f"source {relative!r} could not be read: {exc}") from exc
        fmt = detect_format(data)
        if fmt is None:
            raise ImageError(f"source {relative!r} is not a supported image")
        return Image(format=fmt, data=data)
