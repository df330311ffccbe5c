"""Exceptions raised by the scanning core."""

from __future__ import annotations


class ScanError(Exception):
    """Catastrophic scan failure.

    Node-level filesystem failures never raise this; they are absorbed by the
    size calculator. A ScanError means the scan produced no summary.
    """

    def __init__(self, message: str, category: str | None = None) -> None:
        """Initialize ScanError.

        Args:
            message: Error message
            category: Category being scanned when the failure occurred
        """
        super().__init__(message)
        self.category: str | None = category


class ScanCancelledError(ScanError):
    """Raised when a caller aborts a scan between nodes."""
