"""JSON file storage for usage statistics."""

from __future__ import annotations

import json
import logging
from typing import Any

from devclean.utils import xdg_data_home

log = logging.getLogger(__name__)

_DATA_DIR = xdg_data_home() / "devclean"

STATS_FILE = _DATA_DIR / "stats.json"


def default_stats() -> dict[str, Any]:
    return {
        "total_scans": 0,
        "total_cleans": 0,
        "total_space_freed": 0,
        "last_scan": None,
        "last_clean": None,
    }


def _ensure_data_dir() -> None:
    """Create the data directory if it doesn't exist."""
    _DATA_DIR.mkdir(parents=True, exist_ok=True)


def load_stats() -> dict[str, Any]:
    """Load the stats file, returning defaults if missing or unreadable."""
    stats = default_stats()
    if not STATS_FILE.exists():
        return stats
    try:
        with open(STATS_FILE) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError):
        log.debug("Ignoring unreadable stats file: %s", STATS_FILE)
        return stats
    if not isinstance(data, dict):
        log.debug("Ignoring malformed stats file: %s", STATS_FILE)
        return stats
    for key, default in stats.items():
        if key not in data:
            continue
        value = data[key]
        if _valid_stat(default, value):
            stats[key] = value
        else:
            log.debug("Ignoring invalid stats value for %s: %r", key, value)
    return stats


def _valid_stat(default: Any, value: Any) -> bool:
    """Counters must be non-negative ints, timestamps strings or null."""
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    return value is None or isinstance(value, str)


def save_stats(data: dict[str, Any]) -> None:
    """Write the stats data to disk."""
    try:
        _ensure_data_dir()
        with open(STATS_FILE, "w") as f:
            json.dump(data, f, indent=2)
    except OSError:
        log.exception("Failed to save stats file: %s", STATS_FILE)
