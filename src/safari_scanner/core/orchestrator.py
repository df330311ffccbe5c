"""Scan orchestrator coordinating per-category traversals and progress events.

The orchestrator walks an ordered set of scan targets, delegates each one to
the size calculator, and folds the results into a ScanSummary. It is
responsible for:

- Emitting a category-started event before each traversal
- Re-emitting per-file progress with category context and grand totals
- Pacing categories for consumers that render progress live
- Keeping the total equal to the sum of the categories on every run
- Turning unexpected failures into a ScanError instead of a partial summary

All scan state lives in local variables of :meth:`ScanOrchestrator.scan`, so
concurrent scans on one orchestrator never share counters.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Sequence
from uuid import uuid4

from safari_scanner.core.data.filesystem import SizeCalculator
from safari_scanner.core.exceptions import ScanCancelledError, ScanError
from safari_scanner.types import (
    DirectoryStats,
    ProgressEvent,
    ProgressKind,
    ProgressSink,
    ScanSummary,
    ScanTarget,
    TraversalProgress,
)
from safari_scanner.utils.logging import reset_scan_id, set_scan_id

__all__ = ["ScanOrchestrator"]

_SCAN_ID_LENGTH = 8


class _FileEventRelay:
    """File visitor that re-emits traversal progress as file-found events.

    Grand totals are recomputed on every file as the completed categories
    plus this category's running subtotal.
    """

    __slots__ = ("_completed", "_sink", "_target")

    def __init__(self, target: ScanTarget, completed: DirectoryStats, sink: ProgressSink) -> None:
        self._target: ScanTarget = target
        self._completed: DirectoryStats = completed
        self._sink: ProgressSink = sink

    def __call__(self, progress: TraversalProgress) -> None:
        self._sink(
            ProgressEvent(
                kind=ProgressKind.FILE_FOUND,
                category=self._target.name,
                message=f"Found: {progress.current_file}",
                grand_total_size=self._completed.total_size_bytes + progress.total_size_bytes,
                grand_total_items=self._completed.item_count + progress.item_count,
                category_size=progress.total_size_bytes,
                category_items=progress.item_count,
                current_file=progress.current_file,
            )
        )


class ScanOrchestrator:
    """Measure every configured target in order and aggregate the results."""

    def __init__(
        self,
        targets: Sequence[ScanTarget],
        *,
        calculator: SizeCalculator | None = None,
        category_delay: float = 0.0,
    ) -> None:
        if not targets:
            msg = "At least one scan target must be provided"
            raise ValueError(msg)

        names = [target.name for target in targets]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"Duplicate scan target names: {', '.join(duplicates)}"
            raise ValueError(msg)

        if category_delay < 0:
            msg = "category_delay must be non-negative"
            raise ValueError(msg)

        self.targets: tuple[ScanTarget, ...] = tuple(targets)
        self.category_delay: float = category_delay
        self._calculator: SizeCalculator = calculator or SizeCalculator()
        self._logger: logging.Logger = logging.getLogger(__name__)

    @property
    def category_names(self) -> tuple[str, ...]:
        """Category names in scan order."""
        return tuple(target.name for target in self.targets)

    async def scan(
        self,
        progress_sink: ProgressSink | None = None,
        *,
        cancel_event: threading.Event | None = None,
    ) -> ScanSummary:
        """Run a full scan over every target.

        File-found events are emitted from the worker thread that runs the
        traversal; category-started events from the calling task. Events never
        overlap and arrive in traversal order.

        Args:
            progress_sink: Optional consumer of progress events
            cancel_event: When set, the scan stops before the next node

        Returns:
            Summary with one entry per category, in scan order

        Raises:
            ScanCancelledError: If ``cancel_event`` was set during the scan
            ScanError: If the scan failed for any reason other than a
                node-level filesystem error
        """
        scan_id = uuid4().hex[:_SCAN_ID_LENGTH]
        token = set_scan_id(scan_id)
        started = time.perf_counter()
        try:
            self._logger.info("Starting scan of %d categories", len(self.targets))
            categories = await self._scan_categories(progress_sink, cancel_event)

            total = sum(categories.values(), DirectoryStats())
            summary = ScanSummary(
                categories=categories,
                total=total,
                scan_id=scan_id,
                duration_seconds=time.perf_counter() - started,
                labels={target.name: target.label for target in self.targets},
            )
            self._logger.info(
                "Scan complete: %d bytes in %d files (%d unreadable)",
                total.total_size_bytes,
                total.item_count,
                total.skipped_count,
            )
            return summary
        finally:
            reset_scan_id(token)

    async def _scan_categories(
        self,
        progress_sink: ProgressSink | None,
        cancel_event: threading.Event | None,
    ) -> dict[str, DirectoryStats]:
        categories: dict[str, DirectoryStats] = {}
        grand_total = DirectoryStats()

        for target in self.targets:
            try:
                stats = await self._scan_target(target, grand_total, progress_sink, cancel_event)
            except ScanCancelledError:
                self._logger.info("Scan cancelled during %s", target.name)
                raise
            except ScanError:
                raise
            except Exception as exc:
                self._logger.exception("Scan failed during %s", target.name)
                msg = f"Scan failed during {target.name}: {exc}"
                raise ScanError(msg, category=target.name) from exc

            categories[target.name] = stats
            grand_total = grand_total + stats

        return categories

    async def _scan_target(
        self,
        target: ScanTarget,
        completed: DirectoryStats,
        progress_sink: ProgressSink | None,
        cancel_event: threading.Event | None,
    ) -> DirectoryStats:
        if progress_sink is not None:
            progress_sink(
                ProgressEvent(
                    kind=ProgressKind.CATEGORY_STARTED,
                    category=target.name,
                    message=f"Scanning {target.label}...",
                    grand_total_size=completed.total_size_bytes,
                    grand_total_items=completed.item_count,
                )
            )

        if self.category_delay > 0:
            await asyncio.sleep(self.category_delay)

        on_file_visited: _FileEventRelay | None = None
        if progress_sink is not None:
            on_file_visited = _FileEventRelay(target, completed, progress_sink)

        self._logger.debug("Scanning %s at %s", target.name, target.path)
        stats = await asyncio.to_thread(
            self._calculator.measure,
            target.path,
            on_file_visited,
            cancel_event=cancel_event,
        )
        self._logger.info(
            "Category %s: %d bytes in %d files",
            target.name,
            stats.total_size_bytes,
            stats.item_count,
        )
        return stats
