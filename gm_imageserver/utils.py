"""Shared utilities for gm_imageserver."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator


def now_utc_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def getenv_list(key: str) -> list[str] | None:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return None
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_dotenv(path: Path | None = None, override: bool = False) -> bool:
    """Copy ``KEY=value`` lines of ``path`` (default ``./.env``) into ``os.environ``.

    Existing variables win unless ``override`` is set. Returns False when the
    file does not exist.
    """
    env_path = path or Path.cwd() / ".env"
    if not env_path.is_file():
        return False
    for key, value in _parse_dotenv(env_path.read_text(encoding="utf-8")):
        if override or key not in os.environ:
            os.environ[key] = value
    return True


def _parse_dotenv(text: str) -> Iterator[tuple[str, str]]:
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        line = line.removeprefix("export ").strip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        yield key, value
