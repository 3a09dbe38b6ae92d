"""Scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class ItemKind(str, Enum):
    """Kind of reclaimable artifact."""

    NODE_MODULES = "node_modules"
    BUILD_FOLDER = "build_folder"
    LOG_FILE = "log_file"
    TEMP_FILE = "temp_file"


@dataclass(slots=True)
class Entry:
    """Single filesystem entry produced while walking a tree."""

    path: Path
    is_dir: bool
    depth: int
    size: int = 0
    mtime: float = 0.0
    is_file: bool = False

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(slots=True)
class ReclaimableItem:
    """File or directory that can be reclaimed.

    ``size_bytes`` is measured once at classification time. ``is_stale``
    reflects the modification time of the *containing* directory, so it
    tells whether the project around a generated folder was abandoned.
    """

    path: Path
    size_bytes: int
    kind: ItemKind
    is_stale: bool = False
    subtype: str = ""


@dataclass(slots=True)
class ScanResult:
    """Classified inventory of reclaimable items, partitioned by kind."""

    node_modules: list[ReclaimableItem] = field(default_factory=list)
    build_folders: list[ReclaimableItem] = field(default_factory=list)
    log_files: list[ReclaimableItem] = field(default_factory=list)
    temp_files: list[ReclaimableItem] = field(default_factory=list)
    roots: list[Path] = field(default_factory=list)

    def add(self, item: ReclaimableItem) -> None:
        """Append an item to the partition matching its kind."""
        self._partition(item.kind).append(item)

    def _partition(self, kind: ItemKind) -> list[ReclaimableItem]:
        match kind:
            case ItemKind.NODE_MODULES:
                return self.node_modules
            case ItemKind.BUILD_FOLDER:
                return self.build_folders
            case ItemKind.LOG_FILE:
                return self.log_files
            case ItemKind.TEMP_FILE:
                return self.temp_files
        raise ValueError(f"Unknown item kind: {kind!r}")

    @property
    def items(self) -> list[ReclaimableItem]:
        """All items, partition by partition."""
        return [*self.node_modules, *self.build_folders, *self.log_files, *self.temp_files]

    @property
    def total_bytes(self) -> int:
        return sum(item.size_bytes for item in self.items)

    def cleanable_items(self) -> list[ReclaimableItem]:
        """Default clean selection: stale node_modules plus every other item."""
        return [
            *(item for item in self.node_modules if item.is_stale),
            *self.build_folders,
            *self.log_files,
            *self.temp_files,
        ]
