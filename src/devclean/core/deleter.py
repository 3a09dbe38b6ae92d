"""Destructive removal of files and directories."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, Iterable

from devclean.models.clean_result import CleanResult
from devclean.models.duplicate_set import DuplicateFile
from devclean.models.scan_result import ReclaimableItem

log = logging.getLogger(__name__)

DeleteProgressCallback = Callable[[int, int], None]  # (processed, total)
Deletable = ReclaimableItem | DuplicateFile


def delete_path(path: Path | str) -> bool:
    """Remove a file or a whole directory tree.

    Returns False when the path does not exist or cannot be removed.
    Symlinks are removed themselves, never their target.
    """
    path = Path(path)
    try:
        if path.is_symlink():
            path.unlink()
        elif not path.exists():
            log.debug("Nothing to delete: %s", path)
            return False
        elif path.is_dir():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        log.warning("Failed to delete %s: %s", path, e)
        return False
    return True


def delete_items(
    items: Iterable[Deletable],
    on_progress: DeleteProgressCallback | None = None,
) -> CleanResult:
    """Delete each item independently and account for the outcome.

    Freed bytes are the sizes recorded when the items were found, not a
    fresh measurement.
    """
    items = list(items)
    result = CleanResult()
    for index, item in enumerate(items, 1):
        if delete_path(item.path):
            result.deleted += 1
            result.freed_bytes += item.size_bytes
        else:
            result.failed += 1
            result.errors.append(str(item.path))
        if on_progress:
            on_progress(index, len(items))

    log.info(
        "Deleted %d items (%d failed), freed %d bytes",
        result.deleted,
        result.failed,
        result.freed_bytes,
    )
    return result
