"""Server configuration."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .errors import ConfigError
from .utils import getenv_list, load_dotenv

DEFAULT_EXECUTABLE = "gm"


@dataclass(frozen=True)
class GraphicsMagickConfig:
    """Settings for :class:`~gm_imageserver.graphicsmagick.server.GraphicsMagickServer`.

    ``executable`` is the path to the ``gm`` binary (usually ``/usr/bin/gm``).
    ``timeout`` is in seconds; ``None`` or ``0`` waits for the process
    indefinitely. ``temp_dir`` defaults to the system temp directory.
    ``allowed_formats`` restricts the ``format`` param; ``None`` allows any.
    """

    executable: str
    timeout: float | None = None
    temp_dir: str | None = None
    allowed_formats: Sequence[str] | None = None

    def __post_init__(self) -> None:
        if not self.executable:
            raise ConfigError("GraphicsMagick executable is required.")
        if self.timeout is not None and self.timeout < 0:
            raise ConfigError(f"timeout must be >= 0, got {self.timeout}")
        if self.allowed_formats is not None:
            object.__setattr__(self, "allowed_formats", tuple(self.allowed_formats))

    @classmethod
    def from_env(cls, env_file: Path | None = None, load_env: bool = True) -> "GraphicsMagickConfig":
        """Build the config from ``GM_*`` variables, after loading ``env_file`` (default ``./.env``)."""
        if load_env:
            load_dotenv(env_file)
        executable = os.getenv("GM_EXECUTABLE") or shutil.which(DEFAULT_EXECUTABLE)
        if not executable:
            raise ConfigError("GM_EXECUTABLE not set and `gm` was not found on PATH.")
        return cls(
            executable=executable,
            timeout=_parse_timeout(os.getenv("GM_TIMEOUT")),
            temp_dir=os.getenv("GM_TEMP_DIR") or None,
            allowed_formats=getenv_list("GM_ALLOWED_FORMATS"),
        )


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"GM_TIMEOUT must be a number of seconds, got {raw!r}") from exc
    return value or None
