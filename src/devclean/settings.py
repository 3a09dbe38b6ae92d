"""Read-only JSON settings store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from devclean.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "devclean"
_SETTINGS_FILE = "settings.json"

DEFAULTS: dict[str, Any] = {
    "scan": {
        "max_depth": 3,
        "stale_months": 3,
        "extra_roots": [],
    },
    "duplicates": {
        "min_size": 1024,
        "keep": "first",
    },
    "display": {
        "limit": 5,
        "file_limit": 15,
    },
}


def _lookup(data: dict[str, Any], parts: list[str]) -> tuple[bool, Any]:
    node: Any = data
    for part in parts:
        if not isinstance(node, dict) or part not in node:
            return False, None
        node = node[part]
    return True, node


class Settings:
    """Settings read from a JSON file the user edits by hand.

    Uses dot-notation keys for nested access:
        settings.get("scan.max_depth")  # reads data["scan"]["max_depth"]

    Keys missing from the file fall back to ``DEFAULTS``.
    """

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @classmethod
    def instance(cls) -> Settings:
        """Return the singleton settings instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        parts = key.split(".")
        found, value = _lookup(self._data, parts)
        if found:
            return value
        found, value = _lookup(DEFAULTS, parts)
        return value if found else default

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if isinstance(data, dict):
            self._data = data
        else:
            log.warning("Ignoring settings in %s: expected a JSON object", self._path)

