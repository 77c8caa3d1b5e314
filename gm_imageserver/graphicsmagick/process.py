"""Bounded execution of the GraphicsMagick command."""

from __future__ import annotations

import logging
import queue
import subprocess
import threading
import time
from dataclasses import dataclass
from typing import Sequence

from ..errors import ImageError

logger = logging.getLogger(__name__)

STDERR_LIMIT = 500
# Upper bound on waiting for the stderr reader once the child has been killed.
KILL_JOIN_TIMEOUT_S = 5.0


@dataclass
class CommandResult:
    returncode: int
    duration_s: float
    stderr: str = ""


class CommandTimeout(ImageError):
    def __init__(self, timeout: float) -> None:
        super().__init__(f"GraphicsMagick command: timeout after {timeout:g}s")
        self.timeout = timeout


def run_command(command: Sequence[str], timeout: float | None = None) -> CommandResult:
    """Run ``command`` and wait for it, killing it once ``timeout`` seconds pass.

    The child is waited on from a helper thread that reports into a
    single-slot queue, so the caller can block on the queue with a timeout.
    Launch failures, non-zero exits and timeouts raise :class:`ImageError`.
    """
    argv = list(command)
    started = time.monotonic()
    try:
        proc = subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        raise ImageError(f"GraphicsMagick command: {exc}") from exc
    logger.debug("started pid=%s: %s", proc.pid, argv)

    done: queue.Queue[tuple[int, bytes]] = queue.Queue(maxsize=1)

    def _wait() -> None:
        _, stderr = proc.communicate()
        done.put((proc.returncode, stderr or b""))

    watcher = threading.Thread(target=_wait, name=f"gm-wait-{proc.pid}", daemon=True)
    watcher.start()

    try:
        returncode, stderr = done.get(timeout=timeout or None)
    except queue.Empty:
        proc.kill()
        proc.wait()
        # A descendant may still hold stderr open; do not wait on it forever.
        watcher.join(timeout=KILL_JOIN_TIMEOUT_S)
        logger.warning("killed pid=%s after %.3fs timeout", proc.pid, timeout)
        raise CommandTimeout(timeout) from None

    duration_s = time.monotonic() - started
    message = stderr.decode("utf-8", errors="replace").strip()
    if returncode != 0:
        detail = f"exit status {returncode}"
        if message:
            detail = f"{detail}: {message[:STDERR_LIMIT]}"
        logger.warning("pid=%s failed after %.3fs (%s)", proc.pid, duration_s, detail)
        raise ImageError(f"GraphicsMagick command: {detail}")
    logger.debug("pid=%s completed in %.3fs", proc.pid, duration_s)
    return CommandResult(returncode=returncode, duration_s=duration_s, stderr=message)
