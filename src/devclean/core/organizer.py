"""Sort the files of a folder into category subfolders."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from devclean.exceptions import TargetNotFoundError
from devclean.models.clean_result import OrganizeResult

log = logging.getLogger(__name__)

MoveProgressCallback = Callable[[int, int], None]  # (processed, total)

OTHERS = "Others"

# Ordered; the first bucket listing an extension wins.
CATEGORIES: tuple[tuple[str, frozenset[str]], ...] = (
    ("Images", frozenset({".jpg", ".jpeg", ".png", ".gif", ".bmp", ".svg", ".webp", ".ico"})),
    ("Videos", frozenset({".mp4", ".avi", ".mov", ".mkv", ".flv", ".wmv", ".webm"})),
    ("Documents", frozenset({
        ".pdf", ".doc", ".docx", ".txt", ".rtf", ".odt", ".xls", ".xlsx", ".ppt", ".pptx",
    })),
    ("Archives", frozenset({".zip", ".rar", ".7z", ".tar", ".gz", ".bz2"})),
    ("Code", frozenset({
        ".js", ".ts", ".py", ".java", ".cpp", ".c", ".go", ".rs", ".php", ".rb", ".html", ".css",
    })),
    ("Audio", frozenset({".mp3", ".wav", ".flac", ".aac", ".ogg", ".wma", ".m4a"})),
    ("Executables", frozenset({".exe", ".msi", ".dmg", ".pkg", ".deb", ".rpm", ".app"})),
)


def category_for(filename: str) -> str:
    """Return the bucket name for a file, matching its extension case-insensitively."""
    ext = Path(filename).suffix.lower()
    for name, extensions in CATEGORIES:
        if ext in extensions:
            return name
    return OTHERS


def plan_organize(target_dir: Path | str) -> dict[str, list[Path]]:
    """Map bucket names to the direct child files that would move there.

    Nothing on disk is changed.

    Raises:
        TargetNotFoundError: If ``target_dir`` is not a directory.
    """
    target = Path(target_dir)
    if not target.is_dir():
        raise TargetNotFoundError(target)

    plan: dict[str, list[Path]] = {}
    for item in sorted(target.iterdir()):
        try:
            if not item.is_file():
                continue
        except OSError:
            log.debug("Cannot stat: %s", item)
            continue
        plan.setdefault(category_for(item.name), []).append(item)
    return plan


def unique_destination(directory: Path, filename: str) -> Path:
    """Return a path in ``directory`` that does not exist yet.

    ``report.pdf`` becomes ``report_1.pdf``, ``report_2.pdf``... on
    collision.  There are at most as many taken names as directory entries,
    so the search always ends.
    """
    dest = directory / filename
    if not os.path.lexists(dest):
        return dest

    stem, ext = os.path.splitext(filename)
    limit = len(os.listdir(directory)) + 1
    for counter in range(1, limit + 1):
        dest = directory / f"{stem}_{counter}{ext}"
        if not os.path.lexists(dest):
            return dest
    raise FileExistsError(f"No free name for {filename} in {directory}")


def organize(target_dir: Path | str, on_progress: MoveProgressCallback | None = None) -> OrganizeResult:
    """Move the direct child files of ``target_dir`` into category folders.

    Raises:
        TargetNotFoundError: If ``target_dir`` is not a directory. Nothing
            is moved in that case.
    """
    target = Path(target_dir)
    plan = plan_organize(target)
    total = sum(len(files) for files in plan.values())
    result = OrganizeResult(bucket_count=len(plan))
    processed = 0

    for bucket, files in plan.items():
        bucket_dir = target / bucket
        # A regular file already holding the bucket name makes mkdir fail;
        # the whole bucket is then counted as failed and left in place.
        try:
            bucket_dir.mkdir(exist_ok=True)
        except OSError as e:
            log.warning("Cannot create %s: %s", bucket_dir, e)
            result.failed += len(files)
            processed += len(files)
            if on_progress:
                on_progress(processed, total)
            continue

        for source in files:
            try:
                dest = unique_destination(bucket_dir, source.name)
                source.rename(dest)
                result.moved += 1
                result.buckets[bucket] = result.buckets.get(bucket, 0) + 1
                log.debug("Moved %s -> %s", source, dest)
            except OSError as e:
                log.warning("Cannot move %s: %s", source, e)
                result.failed += 1
            processed += 1
            if on_progress:
                on_progress(processed, total)

    return result
