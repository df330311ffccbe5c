"""Shared utility modules for common operations.

This package provides:
- Data size formatting (bytes to human-readable)
- Duration formatting (seconds to human-readable)
- Logging setup with per-scan correlation IDs
"""

from safari_scanner.utils.formatting import format_bytes, format_duration

__all__ = [
    "format_bytes",
    "format_duration",
]
