"""Image source protocol."""

from __future__ import annotations

from typing import Protocol

from ..image import Image
from ..params import Params


class ImageSource(Protocol):
    """Upstream collaborator that fetches the unprocessed image for a request."""

    name: str

    def get(self, params: Params) -> Image:
        ...
