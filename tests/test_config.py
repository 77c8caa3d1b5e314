from __future__ import annotations

import os
from pathlib import Path

import pytest

from gm_imageserver.config import GraphicsMagickConfig
from gm_imageserver.errors import ConfigError
from gm_imageserver.utils import load_dotenv


def test_config_requires_executable() -> None:
    with pytest.raises(ConfigError):
        GraphicsMagickConfig(executable="")


def test_config_rejects_negative_timeout() -> None:
    with pytest.raises(ConfigError):
        GraphicsMagickConfig(executable="/usr/bin/gm", timeout=-1)


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GM_EXECUTABLE", "/opt/gm/bin/gm")
    monkeypatch.setenv("GM_TIMEOUT", "2.5")
    monkeypatch.setenv("GM_TEMP_DIR", "/var/tmp")
    monkeypatch.setenv("GM_ALLOWED_FORMATS", "jpeg, png,,gif")
    config = GraphicsMagickConfig.from_env(load_env=False)
    assert config.executable == "/opt/gm/bin/gm"
    assert config.timeout == 2.5
    assert config.temp_dir == "/var/tmp"
    assert config.allowed_formats == ("jpeg", "png", "gif")


def test_config_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GM_EXECUTABLE", "/usr/bin/gm")
    monkeypatch.setenv("GM_TIMEOUT", "0")
    monkeypatch.delenv("GM_TEMP_DIR", raising=False)
    monkeypatch.delenv("GM_ALLOWED_FORMATS", raising=False)
    config = GraphicsMagickConfig.from_env(load_env=False)
    assert config.timeout is None
    assert config.temp_dir is None
    assert config.allowed_formats is None


def test_config_from_env_bad_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GM_EXECUTABLE", "/usr/bin/gm")
    monkeypatch.setenv("GM_TIMEOUT", "soon")
    with pytest.raises(ConfigError):
        GraphicsMagickConfig.from_env(load_env=False)


def test_config_from_env_missing_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GM_EXECUTABLE", raising=False)
    monkeypatch.setattr("gm_imageserver.config.shutil.which", lambda name: None)
    with pytest.raises(ConfigError):
        GraphicsMagickConfig.from_env(load_env=False)


def test_from_env_loads_env_file_without_overriding(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(os, "environ", dict(os.environ))
    env_path = tmp_path / "gm.env"
    env_path.write_text(
        '# comment\nexport GM_TIMEOUT="3"\nGM_EXECUTABLE=/from/dotenv\nGM_ALLOWED_FORMATS=webp,png\nbroken line\n',
        encoding="utf-8",
    )
    monkeypatch.setenv("GM_EXECUTABLE", "/from/env")
    monkeypatch.delenv("GM_TIMEOUT", raising=False)
    monkeypatch.delenv("GM_ALLOWED_FORMATS", raising=False)
    config = GraphicsMagickConfig.from_env(env_file=env_path)
    assert config.executable == "/from/env"
    assert config.timeout == 3.0
    assert config.allowed_formats == ("webp", "png")


def test_from_env_reads_dotenv_in_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(os, "environ", dict(os.environ))
    monkeypatch.delenv("GM_EXECUTABLE", raising=False)
    monkeypatch.delenv("GM_TEMP_DIR", raising=False)
    (tmp_path / ".env").write_text("GM_EXECUTABLE='/opt/gm'\nGM_TEMP_DIR=/scratch\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    config = GraphicsMagickConfig.from_env()
    assert config.executable == "/opt/gm"
    assert config.temp_dir == "/scratch"


def test_load_dotenv_missing_file(tmp_path: Path) -> None:
    assert load_dotenv(tmp_path / "missing.env") is False
