"""Application layer: command line, console output and HTTP server."""

from __future__ import annotations

from safari_scanner.app.cli import cli
from safari_scanner.app.runner import ApplicationRunner

__all__ = [
    "cli",
    "ApplicationRunner",
]
