"""Scanning engine: walks root directories and classifies what it finds."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from devclean.core.classifier import Category, classify
from devclean.core.walker import walk
from devclean.models.scan_result import Entry, ItemKind, ReclaimableItem, ScanResult
from devclean.utils import dir_size, is_older_than

log = logging.getLogger(__name__)

ProgressCallback = Callable[[Path, int, int], None]  # (root, index, total)

DEFAULT_MAX_DEPTH = 3
DEFAULT_STALE_MONTHS = 3

_KINDS = {
    Category.NODE_MODULES: ItemKind.NODE_MODULES,
    Category.BUILD_FOLDER: ItemKind.BUILD_FOLDER,
    Category.LOG_FILE: ItemKind.LOG_FILE,
    Category.TEMP_FILE: ItemKind.TEMP_FILE,
}


def _descend(entry: Entry) -> bool:
    """Reclaimable folders are measured as a whole, never entered."""
    return classify(entry.name, True) is Category.OTHER


class ScanEngine:
    """Builds a classified inventory of reclaimable items."""

    def __init__(self, stale_months: int = DEFAULT_STALE_MONTHS, now: datetime | None = None) -> None:
        self.stale_months = stale_months
        self._now = now

    def scan(
        self,
        roots: list[Path],
        max_depth: int = DEFAULT_MAX_DEPTH,
        on_progress: ProgressCallback | None = None,
    ) -> ScanResult:
        """Scan every root in order and merge the findings.

        Args:
            roots: Directories to scan. Missing ones are skipped.
            max_depth: Deepest level listed below each root (0 = its children).
            on_progress: Optional callback fired before each root.

        Returns:
            One ScanResult covering all roots.
        """
        result = ScanResult()
        for index, root in enumerate(roots):
            root = Path(root)
            if on_progress:
                on_progress(root, index, len(roots))
            if not root.is_dir():
                log.warning("Scan root not found, skipping: %s", root)
                continue
            result.roots.append(root)
            before = len(result.items)
            self._scan_root(root, max_depth, result)
            log.info("Scanned %s: %d items", root, len(result.items) - before)
        return result

    def _scan_root(self, root: Path, max_depth: int, result: ScanResult) -> None:
        for entry in walk(root, max_depth, descend=_descend):
            item = self._classify_entry(entry)
            if item is not None:
                result.add(item)

    def _classify_entry(self, entry: Entry) -> ReclaimableItem | None:
        if not entry.is_dir and not entry.is_file:
            return None

        category = classify(entry.name, entry.is_dir)
        if category is Category.OTHER:
            return None
        kind = _KINDS[category]

        if entry.is_dir:
            return ReclaimableItem(
                path=entry.path,
                size_bytes=dir_size(entry.path),
                kind=kind,
                is_stale=is_older_than(entry.path.parent, self.stale_months, self._now),
                subtype=entry.name,
            )
        return ReclaimableItem(path=entry.path, size_bytes=entry.size, kind=kind)
