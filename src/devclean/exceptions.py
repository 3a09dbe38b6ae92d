"""Devclean exceptions."""

from __future__ import annotations

from pathlib import Path


class DevCleanError(Exception):
    """Base class for errors that abort a whole operation."""


class TargetNotFoundError(DevCleanError):
    """Raised when the directory an operation works on does not exist."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Directory not found: {path}")
        self.path = path
