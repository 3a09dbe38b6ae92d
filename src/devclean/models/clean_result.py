"""Cleaning and organizing result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class CleanResult:
    """Result of a batch deletion."""

    deleted: int = 0
    failed: int = 0
    freed_bytes: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class OrganizeResult:
    """Result of sorting a folder into category buckets."""

    moved: int = 0
    bucket_count: int = 0
    failed: int = 0
    buckets: dict[str, int] = field(default_factory=dict)
