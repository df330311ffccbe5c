"""Console reporter: live progress line and summary table."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

import click

from safari_scanner.types import ProgressEvent, ScanSummary, ScanTarget
from safari_scanner.utils.formatting import format_bytes, format_duration

__all__ = ["ConsoleReporter"]

PROGRESS_WIDTH: Final[int] = 60
RULE_WIDTH: Final[int] = 50
SIZE_WIDTH: Final[int] = 12
TOTAL_ICON: Final[str] = "📊"


class ConsoleReporter:
    """Render scan progress and results for a terminal.

    Progress is written as a single line rewritten in place with a carriage
    return. The reporter is a valid progress sink.
    """

    def __init__(self, targets: Sequence[ScanTarget]) -> None:
        self.targets: tuple[ScanTarget, ...] = tuple(targets)
        self._events_seen: int = 0

    def __call__(self, event: ProgressEvent) -> None:
        self.on_progress(event)

    def print_banner(self) -> None:
        """Print the header shown before a scan starts."""
        click.echo("\n🔍 Safari Storage Scanner\n")
        click.echo("=" * RULE_WIDTH)
        click.echo("\nNote: reading Safari data requires Full Disk Access.")
        click.echo("Grant it under System Settings > Privacy & Security > Full Disk Access\n")
        click.echo("Scanning Safari storage locations...\n")

    def on_progress(self, event: ProgressEvent) -> None:
        """Rewrite the progress line with the event's message."""
        self._events_seen += 1
        message = event.message[:PROGRESS_WIDTH]
        click.echo(f"\r{message:<{PROGRESS_WIDTH}}", nl=False)

    def print_summary(self, summary: ScanSummary) -> None:
        """Print one row per category, a separator and the total."""
        if self._events_seen:
            click.echo()
        click.echo("\n" + "=" * RULE_WIDTH)
        click.echo(f"\n{TOTAL_ICON} SAFARI STORAGE SUMMARY\n")

        icons = {target.name: target.icon for target in self.targets}
        labels = [summary.label_for(name) for name in summary.category_names]
        width = max(len(label) for label in [*labels, "TOTAL"]) + 1

        for name, stats in summary.categories.items():
            click.echo(
                self._row(icons.get(name, ""), summary.label_for(name), stats.total_size_bytes, stats.item_count, width)
            )

        click.echo("\n" + "-" * RULE_WIDTH)
        total = summary.total
        click.echo("\n" + self._row(TOTAL_ICON, "TOTAL", total.total_size_bytes, total.item_count, width))
        click.echo(f"\nScanned in {format_duration(summary.duration_seconds)}")
        if total.skipped_count:
            click.echo(
                f"{total.skipped_count} paths could not be read; "
                "check Full Disk Access if totals look low."
            )
        click.echo()

    def print_error(self, message: str) -> None:
        """Report a failed scan on stderr."""
        if self._events_seen:
            click.echo()
        click.echo(f"Error: {message}", err=True)

    @staticmethod
    def _row(icon: str, label: str, size: int, items: int, width: int) -> str:
        prefix = f"{icon} " if icon else ""
        return f"{prefix}{label + ':':<{width}} {format_bytes(size):>{SIZE_WIDTH}} | {items} items"
