"""Logging infrastructure with per-scan correlation ID tracking.

This module configures application logging for safari-scanner: a console
handler on stderr (stdout carries the scan report), an optional rotating
log file, and a scan ID injected into every record so interleaved scans
served over HTTP can be told apart.
"""

import contextvars
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Final, override

# Scan ID context variable; inherited by asyncio tasks and by worker threads
# started through asyncio.to_thread
scan_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_id",
    default=None,
)

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(scan_id)s] - %(message)s"

NO_SCAN_ID: Final[str] = "-"

LOG_FILE_MAX_BYTES: Final[int] = 1024 * 1024
LOG_FILE_BACKUP_COUNT: Final[int] = 3


class ScanIDFilter(logging.Filter):
    """Logging filter that adds the current scan ID to log records.

    Records emitted outside a scan get ``"-"``.
    """

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add scan ID to log record from ContextVar.

        Args:
            record: Log record to enhance with the scan ID

        Returns:
            True to allow the record to be logged
        """
        scan_id = scan_id_var.get()
        record.scan_id = scan_id if scan_id is not None else NO_SCAN_ID
        return True


def configure_logging(
    *,
    log_level: str = "INFO",
    log_file: Path | None = None,
    enable_console: bool = True,
) -> None:
    """Configure application logging.

    Sets up:
    - Scan ID tracking via ContextVar
    - Console output on stderr
    - Optional size-rotated log file

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path of a log file to write in addition to the console
        enable_console: Enable console output handler

    Example:
        >>> configure_logging(log_level="DEBUG")
        >>> logging.getLogger(__name__).info("Scanner ready")
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    scan_id_filter = ScanIDFilter()
    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(scan_id_filter)
        root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(scan_id_filter)
        root_logger.addHandler(file_handler)


def set_scan_id(scan_id: str) -> contextvars.Token[str | None]:
    """Set the scan ID for the current context.

    Args:
        scan_id: Identifier of the scan being run

    Returns:
        Token to pass to :func:`reset_scan_id` when the scan ends
    """
    return scan_id_var.set(scan_id)


def reset_scan_id(token: contextvars.Token[str | None]) -> None:
    """Restore the scan ID that was current before :func:`set_scan_id`."""
    scan_id_var.reset(token)


def get_scan_id() -> str | None:
    """Get the current scan ID from context.

    Returns:
        Current scan ID or None outside a scan
    """
    return scan_id_var.get()
