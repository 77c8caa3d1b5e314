"""Source that always returns the same image."""

from __future__ import annotations

from ..image import Image
from ..params import Params


class StaticSource:
    name = "static"

    def __init__(self, image: Image) -> None:
        self.image = image

    def get(self, params: Params) -> Image:
        return self.image
