"""Application runner for Safari Storage Scanner."""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from collections.abc import Mapping
from pathlib import Path

import click

from safari_scanner.app.console import ConsoleReporter
from safari_scanner.app.payloads import results_payload
from safari_scanner.app.server import ENDPOINTS, run_server
from safari_scanner.config import ConfigLoader, ScannerConfig
from safari_scanner.core.data.filesystem import SizeCalculator
from safari_scanner.core.exceptions import ScanError
from safari_scanner.core.orchestrator import ScanOrchestrator
from safari_scanner.types import ProgressSink, ScanSummary
from safari_scanner.utils.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_SCAN_ERROR = 1


class ApplicationRunner:
    """Main application runner that wires configuration, logging and reporters."""

    def __init__(
        self,
        config_path: Path | None = None,
        log_level: str | None = None,
        overrides: Mapping[str, object] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the application runner.

        Args:
            config_path: Explicit configuration file (searched for when None)
            log_level: Log level override from the command line
            overrides: Further configuration overrides, nested like the file
            environ: Environment mapping for overrides (defaults to os.environ)
        """
        self.config_path: Path | None = config_path
        self.log_level: str | None = log_level
        self.overrides: dict[str, object] = dict(overrides or {})
        self.environ: Mapping[str, str] | None = environ

    def load_config(self) -> ScannerConfig:
        """Load configuration and configure logging from it.

        Raises:
            ConfigError: If the configuration cannot be loaded or validated
        """
        overrides = dict(self.overrides)
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        config = ConfigLoader(self.config_path, environ=self.environ).load(overrides)
        configure_logging(log_level=config.logging.level, log_file=config.logging.file)
        logger.debug("Configured %d scan targets", len(config.targets))
        return config

    def run_scan(self, *, json_output: bool = False) -> int:
        """Scan every configured target and print the results.

        Args:
            json_output: Print the results as JSON instead of the table

        Returns:
            Process exit code

        Raises:
            ConfigError: If the configuration cannot be loaded or validated
        """
        config = self.load_config()
        targets = config.scan_targets()
        reporter = ConsoleReporter(targets)
        orchestrator = ScanOrchestrator(
            targets,
            calculator=SizeCalculator(record_files=config.scan.record_files),
            category_delay=0.0 if json_output else config.scan.category_delay,
        )

        sink: ProgressSink | None = None
        if not json_output:
            reporter.print_banner()
            sink = reporter

        try:
            summary = asyncio.run(self._scan(orchestrator, sink))
        except ScanError as exc:
            reporter.print_error(str(exc))
            return EXIT_SCAN_ERROR

        if json_output:
            click.echo(json.dumps(results_payload(summary), indent=2, ensure_ascii=False))
        else:
            reporter.print_summary(summary)
        return EXIT_SUCCESS

    def serve(self) -> int:
        """Run the HTTP server until interrupted.

        Returns:
            Process exit code
        """
        config = self.load_config()
        base_url = f"http://{config.server.host}:{config.server.port}"
        click.echo(f"\n🚀 Safari Scanner Server running at {base_url}")
        click.echo("\n📡 API Endpoints:")
        for endpoint, description in ENDPOINTS:
            click.echo(f"   {endpoint:<20} - {description}")
        click.echo()

        run_server(config)
        return EXIT_SUCCESS

    @staticmethod
    async def _scan(orchestrator: ScanOrchestrator, sink: ProgressSink | None) -> ScanSummary:
        cancel_event = threading.Event()
        try:
            return await orchestrator.scan(sink, cancel_event=cancel_event)
        except asyncio.CancelledError:
            # Ctrl+C cancels this task; stop the worker thread at the next node
            cancel_event.set()
            raise
