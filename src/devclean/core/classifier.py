"""Name and extension based classification of filesystem entries."""

from __future__ import annotations

import os
from enum import Enum


class Category(str, Enum):
    """Semantic category of a filesystem entry."""

    NODE_MODULES = "node_modules"
    BUILD_FOLDER = "build_folder"
    LOG_FILE = "log_file"
    TEMP_FILE = "temp_file"
    OTHER = "other"


# Exact, case-sensitive directory names.
RECLAIMABLE_FOLDERS = frozenset({
    "node_modules",
    "dist",
    "build",
    ".next",
    ".nuxt",
    "out",
    "coverage",
    ".cache",
    "tmp",
    "temp",
})

LOG_EXTENSIONS = frozenset({".log", ".logs"})
TEMP_EXTENSIONS = frozenset({".tmp", ".temp", ".cache"})


def classify(name: str, is_dir: bool) -> Category:
    """Return the category of an entry from its name alone."""
    if is_dir:
        if name not in RECLAIMABLE_FOLDERS:
            return Category.OTHER
        if name == "node_modules":
            return Category.NODE_MODULES
        return Category.BUILD_FOLDER

    ext = os.path.splitext(name)[1]
    if ext in LOG_EXTENSIONS:
        return Category.LOG_FILE
    if ext in TEMP_EXTENSIONS:
        return Category.TEMP_FILE
    return Category.OTHER
