"""Directory scanner for filesystem operations."""

from __future__ import annotations

import logging
import os
import stat
import threading
from collections.abc import Callable, Iterator
from pathlib import Path

from safari_scanner.core.exceptions import ScanCancelledError
from safari_scanner.types.models import FileRecord

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[Path, OSError], None]


class DirectoryScanner:
    """Scanner for traversing directory trees one node at a time.

    Provides depth-first traversal with:
    - An explicit work stack instead of recursion
    - Directory-listing order preserved (no sorting)
    - Symlinks, sockets, FIFOs and devices skipped without being followed
    - Per-node error recovery: a failing node is reported and skipped
    - Cooperative cancellation between nodes
    """

    def scan_directory(
        self,
        path: str | os.PathLike[str],
        *,
        on_error: ErrorCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> Iterator[FileRecord]:
        """Yield every regular file at or beneath ``path``.

        The generator is suspended at each yield, so whatever the consumer
        does with a file happens before the traversal moves on.

        Args:
            path: Root of the traversal; may be a file, a directory or missing
            on_error: Called with the node and the error for each node that
                could not be read
            cancel_event: When set, the traversal stops before the next node

        Yields:
            FileRecord for each regular file found

        Raises:
            ScanCancelledError: If ``cancel_event`` is set mid-traversal
        """
        root = Path(path)
        stack: list[Path] = [root]

        while stack:
            if cancel_event is not None and cancel_event.is_set():
                raise ScanCancelledError(f"Traversal of {root} cancelled")

            current = stack.pop()
            try:
                # The tree may change under us, so check right before access
                if not os.path.lexists(current):
                    continue

                node_stat = current.lstat()
                if stat.S_ISDIR(node_stat.st_mode):
                    children = list(current.iterdir())
                elif stat.S_ISREG(node_stat.st_mode):
                    children = None
                else:
                    logger.debug("Skipping non-regular file: %s", current)
                    continue
            except OSError as exc:
                self._handle_error(current, exc, on_error)
                continue

            if children is None:
                yield FileRecord(path=current, name=current.name, size_bytes=node_stat.st_size)
            else:
                # Reversed so children pop off the stack in listing order
                stack.extend(reversed(children))

    def _handle_error(self, path: Path, error: OSError, on_error: ErrorCallback | None) -> None:
        """Report a node that could not be read.

        Args:
            path: Node that failed
            error: Error raised while accessing it
            on_error: Optional caller callback
        """
        logger.warning("Cannot access: %s (%s)", path, error.strerror or error)
        if on_error is not None:
            on_error(path, error)
