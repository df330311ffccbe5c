"""Data models for safari-scanner.

This module defines immutable dataclasses passed between the accumulator,
the orchestrator and the reporters.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType


@dataclass(slots=True, frozen=True)
class ScanTarget:
    """A named browser-data location to measure.

    Built once from configuration and never mutated during a scan.
    """

    name: str
    path: Path
    label: str
    icon: str = ""


@dataclass(slots=True, frozen=True)
class FileRecord:
    """A single regular file visited during a traversal."""

    path: Path
    name: str
    size_bytes: int


@dataclass(slots=True, frozen=True)
class DirectoryStats:
    """Result of one traversal.

    Instances add pointwise, which is how the orchestrator folds category
    results into the grand total.
    """

    total_size_bytes: int = 0
    item_count: int = 0
    skipped_count: int = 0
    files: tuple[FileRecord, ...] = ()

    def __add__(self, other: DirectoryStats) -> DirectoryStats:
        if not isinstance(other, DirectoryStats):
            return NotImplemented
        return DirectoryStats(
            total_size_bytes=self.total_size_bytes + other.total_size_bytes,
            item_count=self.item_count + other.item_count,
            skipped_count=self.skipped_count + other.skipped_count,
            files=self.files + other.files,
        )


@dataclass(slots=True, frozen=True)
class TraversalProgress:
    """Cumulative traversal state handed to a file visitor."""

    record: FileRecord
    total_size_bytes: int
    item_count: int

    @property
    def current_file(self) -> str:
        """Base name of the file just measured."""
        return self.record.name


class ProgressKind(str, Enum):
    """Kinds of progress events emitted by the orchestrator."""

    CATEGORY_STARTED = "category_started"
    FILE_FOUND = "file_found"


@dataclass(slots=True, frozen=True)
class ProgressEvent:
    """Progress notification relayed to a progress sink.

    Category-started events carry no per-category counters; file-found events
    carry the category's running subtotal and the file that was measured.
    """

    kind: ProgressKind
    category: str
    message: str
    grand_total_size: int
    grand_total_items: int
    category_size: int | None = None
    category_items: int | None = None
    current_file: str | None = None


@dataclass(slots=True, frozen=True)
class ScanSummary:
    """Aggregate result of a full scan across all categories.

    ``categories`` preserves scan order. ``total`` is the pointwise sum of
    every category's statistics.
    """

    categories: Mapping[str, DirectoryStats]
    total: DirectoryStats
    scan_id: str = ""
    duration_seconds: float = 0.0
    labels: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the mappings so a finished summary cannot be mutated
        object.__setattr__(self, "categories", MappingProxyType(dict(self.categories)))
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))

    def __getitem__(self, category: str) -> DirectoryStats:
        return self.categories[category]

    def __contains__(self, category: object) -> bool:
        return category in self.categories

    @property
    def category_names(self) -> tuple[str, ...]:
        """Category names in scan order."""
        return tuple(self.categories)

    def label_for(self, category: str) -> str:
        """Human-readable label for a category, falling back to its name."""
        return self.labels.get(category, category)
