"""GraphicsMagick image server."""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path
from typing import Any

from ..config import GraphicsMagickConfig
from ..errors import ImageError, ParamError
from ..image import Image
from ..params import Params
from ..runs.events import EventWriter
from ..sources.base import ImageSource
from .arguments import build_arguments
from .process import CommandTimeout, run_command
from .workspace import workspace

logger = logging.getLogger(__name__)

GLOBAL_PARAM = "graphicsmagick"
COMMAND_VERB = "mogrify"


class GraphicsMagickServer:
    """Gets an image from ``source`` and processes it with ``gm mogrify``.

    All params are read from the ``graphicsmagick`` node and are optional:

    - width / height: ``-resize`` geometry, either may be omitted
    - fill, ignore_ratio, only_shrink_larger, only_enlarge_smaller:
      ``^``, ``!``, ``>`` and ``<`` modifiers of ``-resize``
    - extent: ``-extent`` using width/height
    - background: ``-background`` color, 3/4/6/8 lower case hex characters
    - gravity: ``-gravity`` (n, s, e, w, ne, se, nw, sw), default Center
    - crop: ``-crop`` as "w,h" or "w,h,x,y", followed by ``+repage``
    - rotate: ``-rotate`` in degrees, 0-359
    - monochrome: ``-monochrome``
    - grey: ``-colorspace GRAY``
    - trim: ``-trim``, always applied first
    - no_interlace: disables the default ``-interlace Line``
    - flip / flop: ``-flip`` / ``-flop``
    - format: ``-format``, restricted by ``config.allowed_formats``
    - quality: ``-quality``, 0-100 for jpeg
    """

    def __init__(
        self,
        source: ImageSource,
        config: GraphicsMagickConfig,
        events: EventWriter | None = None,
    ) -> None:
        self.source = source
        self.config = config
        self.events = events

    def get(self, params: Params) -> Image:
        image = self.source.get(params)
        if not params.has(GLOBAL_PARAM):
            return image
        gm_params = params.get_params(GLOBAL_PARAM)
        if gm_params.empty():
            return image
        try:
            return self.process(image, gm_params)
        except ParamError as exc:
            exc.param = f"{GLOBAL_PARAM}.{exc.param}"
            raise

    def process(self, image: Image, params: Params) -> Image:
        built = build_arguments(params, image.format, self.config.allowed_formats)
        if not built.arguments:
            return image
        built.arguments.push_front(COMMAND_VERB)
        logger.debug("gm arguments: %s", built.arguments.to_list())

        invocation_id = uuid.uuid4().hex
        with workspace(image.data, temp_dir=self.config.temp_dir) as ws:
            command = [self.config.executable, *built.arguments, str(ws.source_path)]
            self._run(command, invocation_id, ws.directory)
            data = ws.read_output(built.format if built.format_specified else None)
        return Image(format=built.format, data=data)

    def _run(self, command: list[str], invocation_id: str, workspace_dir: Path) -> None:
        self._emit("process_started", invocation_id, command=command, workspace=workspace_dir.name)
        started = time.monotonic()
        try:
            result = run_command(command, timeout=self.config.timeout)
        except CommandTimeout as exc:
            self._emit("process_timeout", invocation_id, timeout_s=exc.timeout, duration_s=time.monotonic() - started)
            raise
        except ImageError as exc:
            self._emit("process_failed", invocation_id, error=exc.message, duration_s=time.monotonic() - started)
            raise
        self._emit("process_completed", invocation_id, duration_s=result.duration_s)

    def _emit(self, event_type: str, invocation_id: str, **payload: Any) -> None:
        if self.events is not None:
            self.events.emit(event_type, invocation_id, **payload)
