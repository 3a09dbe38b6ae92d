"""Streaming content digests."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

log = logging.getLogger(__name__)

_CHUNK_SIZE = 65_536  # 64 KB


def hash_file(path: Path | str, chunk_size: int = _CHUNK_SIZE) -> str | None:
    """Compute SHA-256 of a file using chunked reads.

    Returns None when the file cannot be read.
    """
    h = hashlib.sha256()
    try:
        with open(path, "rb") as f:
            while chunk := f.read(chunk_size):
                h.update(chunk)
    except OSError:
        log.debug("Cannot hash: %s", path)
        return None
    return h.hexdigest()
