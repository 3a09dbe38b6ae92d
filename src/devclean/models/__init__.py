"""Devclean data models."""

from devclean.models.scan_result import Entry, ItemKind, ReclaimableItem, ScanResult
from devclean.models.duplicate_set import DuplicateFile, DuplicateSet
from devclean.models.clean_result import CleanResult, OrganizeResult

__all__ = [
    "CleanResult",
    "DuplicateFile",
    "DuplicateSet",
    "Entry",
    "ItemKind",
    "OrganizeResult",
    "ReclaimableItem",
    "ScanResult",
]
