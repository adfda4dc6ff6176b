"""Shared test fixtures for chromecastise."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from chromecastise.config import clear_config_cache
from chromecastise.introspector import MediaProbe
from chromecastise.logging import clear_file_context


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path):
    """Point every test at an empty config directory.

    Keeps a developer's ~/.chromecastise/config.toml and CHROMECASTISE_*
    variables from leaking into test runs.
    """
    config_dir = tmp_path / ".chromecastise"
    config_dir.mkdir()
    env = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith("CHROMECASTISE_")
    }
    env["CHROMECASTISE_CONFIG_PATH"] = str(config_dir / "config.toml")

    clear_config_cache()
    with patch.dict(os.environ, env, clear=True):
        yield config_dir
    clear_config_cache()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_file_context()


@pytest.fixture
def media_dir(tmp_path: Path) -> Path:
    """Directory with a few empty source files."""
    video_dir = tmp_path / "videos"
    video_dir.mkdir()
    for name in ("movie.mkv", "clip.avi", "show.mp4"):
        (video_dir / name).touch()
    return video_dir


def make_probe(
    path: Path,
    container: str = "Matroska",
    video_codec: str = "AVC",
    audio_codec: str = "AAC",
) -> MediaProbe:
    """Build a MediaProbe with Chromecast-friendly defaults."""
    return MediaProbe(
        path=path,
        container=container,
        video_codec=video_codec,
        audio_codec=audio_codec,
    )


@pytest.fixture
def probe_factory():
    """Return the make_probe helper."""
    return make_probe
