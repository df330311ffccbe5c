"""JSON payloads shared by the HTTP endpoints and the ``--json`` console mode."""

from __future__ import annotations

import json

from safari_scanner.types import DirectoryStats, ProgressEvent, ScanSummary
from safari_scanner.utils.formatting import format_bytes

__all__ = [
    "error_payload",
    "progress_payload",
    "results_payload",
    "sse_message",
]


def _stats_payload(stats: DirectoryStats) -> dict[str, object]:
    return {
        "size": stats.total_size_bytes,
        "items": stats.item_count,
        "sizeFormatted": format_bytes(stats.total_size_bytes),
    }


def progress_payload(event: ProgressEvent) -> dict[str, object]:
    """Serialize a progress event for streaming clients.

    ``size`` and ``items`` are grand totals, so a client can render one
    running counter without tracking categories.
    """
    return {
        "type": "progress",
        "scanning": event.category,
        "message": event.message,
        "size": event.grand_total_size,
        "items": event.grand_total_items,
        "sizeFormatted": format_bytes(event.grand_total_size),
    }


def results_payload(summary: ScanSummary) -> dict[str, object]:
    """Serialize a finished scan: one entry per category plus ``total``."""
    results: dict[str, object] = {}
    for name, stats in summary.categories.items():
        entry = _stats_payload(stats)
        entry["category"] = summary.label_for(name)
        results[name] = entry
    results["total"] = _stats_payload(summary.total)
    return results


def error_payload(message: str) -> dict[str, object]:
    """Serialize a scan failure for streaming clients."""
    return {"type": "error", "message": message}


def sse_message(payload: dict[str, object]) -> bytes:
    """Encode a payload as one Server-Sent-Events ``data`` message."""
    return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n".encode()
