"""Upstream image sources."""

from __future__ import annotations

from .base import ImageSource
from .file import FileSource
from .static import StaticSource

__all__ = ["FileSource", "ImageSource", "StaticSource"]
