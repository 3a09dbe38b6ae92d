"""Duplicate set dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(slots=True)
class DuplicateFile:
    """A file taking part in duplicate detection."""

    path: Path
    size_bytes: int
    mtime: float = 0.0


@dataclass(slots=True)
class DuplicateSet:
    """Two or more files sharing the same SHA-256 digest.

    Equal digests are taken to mean equal content.  ``files[0]`` is the
    keeper; the order of the rest depends on the keep policy used by
    the detector.
    """

    digest: str
    files: list[DuplicateFile] = field(default_factory=list)

    @property
    def keeper(self) -> DuplicateFile:
        return self.files[0]

    @property
    def redundant(self) -> list[DuplicateFile]:
        """Copies that can be deleted while keeping the keeper."""
        return self.files[1:]

    @property
    def wasted_bytes(self) -> int:
        return sum(f.size_bytes for f in self.redundant)
