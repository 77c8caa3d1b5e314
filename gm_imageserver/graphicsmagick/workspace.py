"""Per-invocation scratch directory for the mogrify command."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from ..errors import WorkspaceError

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "imageserver_"
SOURCE_FILENAME = "image"


@dataclass(frozen=True)
class Workspace:
    directory: Path
    source_path: Path

    def output_path(self, fmt: str | None = None) -> Path:
        """mogrify writes ``<file>.<format>`` when ``-format`` is given."""
        if fmt:
            return self.source_path.parent / f"{self.source_path.name}.{fmt}"
        return self.source_path

    def read_output(self, fmt: str | None = None) -> bytes:
        path = self.output_path(fmt)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise WorkspaceError(f"Failed to read processed image {path}: {exc}") from exc


@contextmanager
def workspace(
    data: bytes,
    temp_dir: str | Path | None = None,
    prefix: str = TEMP_DIR_PREFIX,
) -> Iterator[Workspace]:
    """Create a unique temp directory holding ``data``; always removed on exit."""
    try:
        directory = Path(tempfile.mkdtemp(prefix=prefix, dir=temp_dir))
    except OSError as exc:
        raise WorkspaceError(f"Failed to create temp directory in {temp_dir or tempfile.gettempdir()}: {exc}") from exc
    try:
        source_path = directory / SOURCE_FILENAME
        _write_private(source_path, data)
        logger.debug("workspace created: %s (%d bytes)", directory, len(data))
        yield Workspace(directory=directory, source_path=source_path)
    finally:
        shutil.rmtree(directory, ignore_errors=True)
        logger.debug("workspace removed: %s", directory)


def _write_private(path: Path, data: bytes) -> None:
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
    except OSError as exc:
        raise WorkspaceError(f"Failed to write source image {path}: {exc}") from exc
