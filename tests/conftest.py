"""Shared test fixtures."""

from __future__ import annotations

import pytest

import devclean.storage as storage
from devclean.settings import Settings


@pytest.fixture
def isolate_storage(tmp_path, monkeypatch):
    """Redirect the stats file to a temp directory."""
    data_dir = tmp_path / "devclean_data"
    data_dir.mkdir()
    stats_file = data_dir / "stats.json"
    monkeypatch.setattr(storage, "STATS_FILE", stats_file)
    monkeypatch.setattr(storage, "_DATA_DIR", data_dir)
    return stats_file


@pytest.fixture
def isolate_settings(tmp_path, monkeypatch):
    """Point settings at an empty temp config directory."""
    config = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config))
    monkeypatch.setattr(Settings, "_instance", None)
    return config / "devclean" / "settings.json"


def make_file(path, size: int = 0, content: bytes | None = None):
    """Create a file (and its parents) of ``size`` bytes or with ``content``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if content is not None:
        path.write_bytes(content)
    else:
        with open(path, "wb") as f:
            f.truncate(size)
    return path
