"""Type definitions and protocols for safari-scanner.

This package provides:
- Data models (immutable dataclasses)
- Protocol definitions (structural subtyping interfaces)
"""

from safari_scanner.types.models import (
    DirectoryStats,
    FileRecord,
    ProgressEvent,
    ProgressKind,
    ScanSummary,
    ScanTarget,
    TraversalProgress,
)
from safari_scanner.types.protocols import FileVisitor, ProgressSink

__all__ = [
    # Data models
    "DirectoryStats",
    "FileRecord",
    "ProgressEvent",
    "ProgressKind",
    "ScanSummary",
    "ScanTarget",
    "TraversalProgress",
    # Protocols
    "FileVisitor",
    "ProgressSink",
]
