"""Depth-bounded, fault-tolerant directory traversal."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Callable, Iterator

from devclean.models.scan_result import Entry

log = logging.getLogger(__name__)

DescendPredicate = Callable[[Entry], bool]


def walk(
    root: Path | str,
    max_depth: int,
    descend: DescendPredicate | None = None,
) -> Iterator[Entry]:
    """Lazily yield entries below ``root``.

    The root's direct children have depth 0.  A directory is listed only
    while its children's depth does not exceed ``max_depth``; deeper
    subtrees are left out without error.  ``descend`` is asked for every
    yielded directory and returning False keeps the walk out of it.

    Entries are stat'ed following symlinks.  Directories are remembered by
    ``(st_dev, st_ino)`` and never entered twice, so a symlink pointing
    back up the tree cannot make the walk loop.  Unreadable directories
    and entries that vanish or cannot be stat'ed are skipped.
    """
    root = Path(root)
    visited: set[tuple[int, int]] = set()
    try:
        st = root.stat()
    except OSError:
        log.debug("Cannot stat root: %s", root)
        return
    visited.add((st.st_dev, st.st_ino))
    yield from _walk_dir(root, 0, max_depth, descend, visited)


def _walk_dir(
    directory: Path,
    depth: int,
    max_depth: int,
    descend: DescendPredicate | None,
    visited: set[tuple[int, int]],
) -> Iterator[Entry]:
    if depth > max_depth:
        return

    try:
        with os.scandir(directory) as it:
            dir_entries = list(it)
    except OSError:
        log.debug("Cannot read directory: %s", directory)
        return

    for dir_entry in dir_entries:
        try:
            st = dir_entry.stat()
        except OSError:
            log.debug("Cannot stat: %s", dir_entry.path)
            continue

        is_dir = stat.S_ISDIR(st.st_mode)
        entry = Entry(
            path=Path(dir_entry.path),
            is_dir=is_dir,
            depth=depth,
            size=st.st_size,
            mtime=st.st_mtime,
            is_file=stat.S_ISREG(st.st_mode),
        )
        yield entry

        if not is_dir or (descend is not None and not descend(entry)):
            continue
        key = (st.st_dev, st.st_ino)
        if key in visited:
            log.debug("Skipping already visited directory: %s", dir_entry.path)
            continue
        visited.add(key)
        yield from _walk_dir(entry.path, depth + 1, max_depth, descend, visited)
