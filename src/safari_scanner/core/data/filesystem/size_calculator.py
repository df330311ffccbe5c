"""Size accumulation for directory trees with per-file progress reporting."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from safari_scanner.types.models import DirectoryStats, FileRecord, TraversalProgress
from safari_scanner.types.protocols import FileVisitor

from .scanner import DirectoryScanner

logger = logging.getLogger(__name__)


class SizeCalculator:
    """Calculator for the total byte size and file count of a directory tree.

    Provides:
    - Exact sums over every regular file that could be read
    - A synchronous visitor invoked after each file, in traversal order
    - Zero contribution (never an exception) for missing or unreadable nodes
    - Optional recording of every visited file

    The calculator holds no per-traversal state, so one instance may serve
    several traversals, including concurrent ones.
    """

    def __init__(
        self,
        scanner: DirectoryScanner | None = None,
        record_files: bool = False,
    ) -> None:
        """Initialize the size calculator.

        Args:
            scanner: Directory scanner used for traversal
            record_files: Whether results include a FileRecord per file
        """
        self.scanner: DirectoryScanner = scanner or DirectoryScanner()
        self.record_files: bool = record_files

    def measure(
        self,
        path: str | os.PathLike[str],
        on_file_visited: FileVisitor | None = None,
        *,
        cancel_event: threading.Event | None = None,
        record_files: bool | None = None,
    ) -> DirectoryStats:
        """Measure the size of a file or directory tree.

        Args:
            path: Root path; need not exist
            on_file_visited: Called inline after each file with running totals.
                Exceptions it raises propagate to the caller.
            cancel_event: When set, the traversal stops before the next node
            record_files: Override the calculator's ``record_files`` setting

        Returns:
            DirectoryStats over all successfully read nodes

        Raises:
            ScanCancelledError: If ``cancel_event`` is set mid-traversal
        """
        keep_files = self.record_files if record_files is None else record_files
        total_size = 0
        item_count = 0
        skipped = 0
        files: list[FileRecord] = []

        def count_skipped(_path: Path, _error: OSError) -> None:
            nonlocal skipped
            skipped += 1

        for record in self.scanner.scan_directory(
            path, on_error=count_skipped, cancel_event=cancel_event
        ):
            total_size += record.size_bytes
            item_count += 1
            if keep_files:
                files.append(record)
            if on_file_visited is not None:
                on_file_visited(TraversalProgress(record, total_size, item_count))

        logger.debug(
            "Measured %s: %d bytes in %d files (%d skipped)",
            path,
            total_size,
            item_count,
            skipped,
        )
        return DirectoryStats(
            total_size_bytes=total_size,
            item_count=item_count,
            skipped_count=skipped,
            files=tuple(files),
        )
