"""GraphicsMagick-backed image processing server."""

from __future__ import annotations

from .config import GraphicsMagickConfig
from .errors import ConfigError, ImageError, ImageServerError, ParamError, WorkspaceError
from .graphicsmagick import GraphicsMagickServer
from .image import Image
from .params import Params

__all__ = [
    "ConfigError",
    "GraphicsMagickConfig",
    "GraphicsMagickServer",
    "Image",
    "ImageError",
    "ImageServerError",
    "Params",
    "ParamError",
    "WorkspaceError",
]
