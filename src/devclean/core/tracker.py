"""Tracks scans, cleans and freed space across runs."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from devclean.storage import load_stats, save_stats

log = logging.getLogger(__name__)


class Tracker:
    """Accumulates usage counters in the stats file.

    Every update is a load/modify/save round trip without locking, so two
    devclean processes updating at once can lose one of the updates.
    """

    def record_scan(self) -> None:
        """Count one completed scan."""
        stats = load_stats()
        stats["total_scans"] += 1
        stats["last_scan"] = _now_iso()
        save_stats(stats)

    def record_clean(self, freed_bytes: int) -> None:
        """Count one completed clean that freed ``freed_bytes``."""
        stats = load_stats()
        stats["total_cleans"] += 1
        stats["total_space_freed"] += max(freed_bytes, 0)
        stats["last_clean"] = _now_iso()
        save_stats(stats)
        log.info("Recorded clean: %d bytes freed", freed_bytes)

    def get_stats(self) -> dict[str, Any]:
        """Return the persisted counters."""
        return load_stats()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
