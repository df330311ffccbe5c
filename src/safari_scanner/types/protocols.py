"""Protocol definitions for component interfaces.

This module defines the callback contracts between the accumulator, the
orchestrator and whatever consumes scan progress, without requiring
inheritance.
"""

from typing import Protocol, runtime_checkable

from safari_scanner.types.models import ProgressEvent, TraversalProgress


@runtime_checkable
class ProgressSink(Protocol):
    """Consumer of incremental scan events.

    Called inline and in traversal order. File events may arrive on a worker
    thread, so implementations that touch an event loop must hand the event
    over thread-safely.
    """

    def __call__(self, event: ProgressEvent) -> None:
        """Receive one progress event.

        Args:
            event: Progress notification with category and running totals
        """
        ...


class FileVisitor(Protocol):
    """Per-file callback invoked by the size calculator."""

    def __call__(self, progress: TraversalProgress) -> None:
        """Receive the cumulative state after a file has been measured.

        Args:
            progress: File just measured plus running totals of the traversal
        """
        ...
