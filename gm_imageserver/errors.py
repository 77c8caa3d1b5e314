"""Error taxonomy for the image server."""

from __future__ import annotations


class ImageServerError(Exception):
    """Base class for every error raised by gm_imageserver."""


class ParamError(ImageServerError):
    """A request parameter is missing, mistyped or out of range.

    ``param`` names the offending parameter. Callers that own a namespace
    prefix it (``graphicsmagick.width``) so the error maps back to the
    original request field.
    """

    def __init__(self, param: str, message: str) -> None:
        super().__init__(param, message)
        self.param = param
        self.message = message

    def __str__(self) -> str:
        return f'invalid param "{self.param}": {self.message}'


class ImageError(ImageServerError):
    """The image could not be produced (tool failure, timeout, bad source)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"image error: {self.message}"


class WorkspaceError(ImageServerError):
    """Filesystem failure while preparing or reading the temporary workspace."""


class ConfigError(ImageServerError):
    """Invalid server configuration."""
