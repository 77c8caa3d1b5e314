from __future__ import annotations

import io
import json
import stat
import sys
from pathlib import Path

import pytest
from PIL import Image as PILImage

from gm_imageserver.image import Image

# Stands in for `gm`: records argv, then writes the "processed" file the way
# mogrify does (in place, or as <file>.<format> when -format is given).
FAKE_GM = """\
import json
import os
import subprocess
import sys
import time

argv = sys.argv[1:]
child_pid = None
if os.environ.get("FAKE_GM_SPAWN_CHILD"):
    # Inherits stderr and outlives this process.
    child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
    child_pid = child.pid
log_path = os.environ.get("FAKE_GM_LOG")
if log_path:
    with open(log_path, "a", encoding="utf-8") as handle:
        handle.write(json.dumps({"argv": argv, "pid": os.getpid(), "child_pid": child_pid}) + "\\n")
time.sleep(float(os.environ.get("FAKE_GM_SLEEP", "0")))
exit_code = int(os.environ.get("FAKE_GM_EXIT", "0"))
if exit_code:
    sys.stderr.write("gm mogrify: unable to open image\\n")
    sys.exit(exit_code)
path = argv[-1]
with open(path, "rb") as handle:
    data = handle.read()
if "-format" in argv:
    fmt = argv[argv.index("-format") + 1]
    with open(f"{path}.{fmt}", "wb") as handle:
        handle.write(b"converted-" + fmt.encode() + b":" + data)
else:
    with open(path, "wb") as handle:
        handle.write(b"processed:" + data)
"""


@pytest.fixture
def fake_gm(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    script = tmp_path / "bin" / "gm"
    script.parent.mkdir()
    script.write_text(f"#!{sys.executable}\n{FAKE_GM}", encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("FAKE_GM_LOG", str(tmp_path / "gm-calls.jsonl"))
    monkeypatch.delenv("FAKE_GM_SLEEP", raising=False)
    monkeypatch.delenv("FAKE_GM_EXIT", raising=False)
    monkeypatch.delenv("FAKE_GM_SPAWN_CHILD", raising=False)
    return script


@pytest.fixture
def gm_calls(tmp_path: Path):
    log_path = tmp_path / "gm-calls.jsonl"

    def _read() -> list[dict]:
        if not log_path.exists():
            return []
        return [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]

    return _read


@pytest.fixture
def png_image() -> Image:
    buffer = io.BytesIO()
    PILImage.new("RGB", (64, 32), (200, 30, 30)).save(buffer, format="PNG")
    return Image(format="png", data=buffer.getvalue())
