"""Duplicate file detection by content digest."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from devclean.core.hasher import hash_file
from devclean.core.walker import walk
from devclean.models.duplicate_set import DuplicateFile, DuplicateSet
from devclean.models.scan_result import Entry

log = logging.getLogger(__name__)

HashProgressCallback = Callable[[int, int], None]  # (hashed, total)

DEFAULT_MIN_SIZE = 1024
KEEP_FIRST = "first"
KEEP_OLDEST = "oldest"
KEEP_POLICIES = (KEEP_FIRST, KEEP_OLDEST)


def _descend(entry: Entry) -> bool:
    return entry.name != "node_modules" and not entry.name.startswith(".")


def collect_files(root: Path | str, max_depth: int = 3, min_size: int = DEFAULT_MIN_SIZE) -> list[DuplicateFile]:
    """List regular files larger than ``min_size`` bytes, in discovery order.

    ``node_modules`` and hidden directories are pruned entirely.
    """
    files: list[DuplicateFile] = []
    for entry in walk(root, max_depth, descend=_descend):
        if entry.is_file and entry.size > min_size:
            files.append(DuplicateFile(path=entry.path, size_bytes=entry.size, mtime=entry.mtime))
    return files


def group_duplicates(
    files: list[DuplicateFile],
    keep: str = KEEP_FIRST,
    on_progress: HashProgressCallback | None = None,
) -> list[DuplicateSet]:
    """Group files with identical content.

    Only files sharing their size with another file are hashed.  Sets come
    out in the order their first member was discovered.

    With ``keep="first"`` the first discovered file leads each set; with
    ``keep="oldest"`` each set is stably sorted by modification time.
    """
    if keep not in KEEP_POLICIES:
        raise ValueError(f"Unknown keep policy: {keep!r}")

    by_size: dict[int, int] = {}
    for f in files:
        by_size[f.size_bytes] = by_size.get(f.size_bytes, 0) + 1
    candidates = [f for f in files if by_size[f.size_bytes] > 1]

    by_hash: dict[str, list[DuplicateFile]] = {}
    for index, f in enumerate(candidates, 1):
        digest = hash_file(f.path)
        if digest is not None:
            by_hash.setdefault(digest, []).append(f)
        if on_progress:
            on_progress(index, len(candidates))

    duplicates: list[DuplicateSet] = []
    for digest, members in by_hash.items():
        if len(members) < 2:
            continue
        if keep == KEEP_OLDEST:
            members.sort(key=lambda f: f.mtime)
        duplicates.append(DuplicateSet(digest=digest, files=members))
    return duplicates


def find_duplicates(
    root: Path | str,
    max_depth: int = 3,
    min_size: int = DEFAULT_MIN_SIZE,
    keep: str = KEEP_FIRST,
    on_progress: HashProgressCallback | None = None,
) -> list[DuplicateSet]:
    """Find sets of files with identical content under ``root``."""
    files = collect_files(root, max_depth, min_size)
    log.info("Found %d candidate files under %s", len(files), root)
    duplicates = group_duplicates(files, keep=keep, on_progress=on_progress)
    log.info("Found %d duplicate sets", len(duplicates))
    return duplicates
