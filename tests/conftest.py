"""Shared fixtures."""

import pytest

from image_selector.utils.config import Config


@pytest.fixture
def config(tmp_path):
    """Configuration stored under tmp_path instead of the home directory."""
    return Config(tmp_path / "settings" / "config.json")


@pytest.fixture
def source_dir(tmp_path):
    """Source folder with three candidate images and some noise."""
    source = tmp_path / "inbox"
    source.mkdir()
    for name in ("a.png", "b.png", "c.png"):
        (source / name).write_bytes(name.encode())
    (source / "notes.txt").touch()
    return source
