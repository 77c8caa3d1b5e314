"""Append-only stream of GraphicsMagick invocation events."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Any

from ..utils import now_utc_iso


@dataclass
class EventWriter:
    """One JSON line per event, keyed by the invocation that produced it.

    Concurrent invocations share a writer; ``invocation_id`` is what ties a
    ``process_started`` line to its ``process_completed``/``_failed``/``_timeout``.
    """

    path: Path
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, init=False)

    def emit(self, event_type: str, invocation_id: str, **payload: Any) -> dict[str, Any]:
        event = {
            "type": event_type,
            "invocation_id": invocation_id,
            "ts": now_utc_iso(),
            **payload,
        }
        line = f"{json.dumps(event, default=str)}\n"
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        return event

    def read(self, invocation_id: str | None = None) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        events = [json.loads(line) for line in self.path.read_text(encoding="utf-8").splitlines() if line]
        if invocation_id is None:
            return events
        return [event for event in events if event.get("invocation_id") == invocation_id]
