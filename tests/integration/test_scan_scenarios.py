"""End-to-end scans over a fake Safari data layout."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from safari_scanner.app.cli import cli
from safari_scanner.config.models.targets import default_targets
from safari_scanner.core.orchestrator import ScanOrchestrator
from safari_scanner.types import DirectoryStats, ProgressEvent


class TestDefaultLocations:
    """Scans over the built-in Safari locations."""

    async def test_nested_locations_are_counted_in_each_category(self, safari_home: Path) -> None:
        """Test that overlapping locations are measured independently."""
        targets = [t.to_scan_target() for t in default_targets(home=safari_home)]

        summary = await ScanOrchestrator(targets).scan()

        assert summary["cookies"] == DirectoryStats(total_size_bytes=300, item_count=2)
        assert summary["cache"] == DirectoryStats(total_size_bytes=400, item_count=3)
        # History contains LocalStorage, so its file is counted in both
        assert summary["history"] == DirectoryStats(total_size_bytes=410, item_count=2)
        assert summary["localStorage"] == DirectoryStats(total_size_bytes=10, item_count=1)
        assert summary["databases"] == DirectoryStats()
        assert summary.total.total_size_bytes == 1120
        assert summary.total.item_count == 8

    async def test_fresh_machine_reports_zero(self, tmp_path: Path) -> None:
        """Test a home directory without any Safari data."""
        targets = [t.to_scan_target() for t in default_targets(home=tmp_path)]
        events: list[ProgressEvent] = []

        summary = await ScanOrchestrator(targets).scan(events.append)

        assert summary.total == DirectoryStats()
        assert [e.category for e in events] == ["cookies", "cache", "history", "localStorage", "databases"]


class TestCommandLine:
    """Run the installed command against a fake home directory."""

    @pytest.fixture
    def runner(self) -> CliRunner:
        """Create a Click test runner."""
        return CliRunner()

    def test_json_scan(self, runner: CliRunner, safari_home: Path) -> None:
        """Test the JSON report of a full scan."""
        with runner.isolated_filesystem():
            result = runner.invoke(
                cli,
                ["scan", "--json"],
                env={"HOME": str(safari_home), "SAFARI_SCANNER_LOGGING__LEVEL": "ERROR"},
            )

        assert result.exit_code == 0, result.output
        start = result.output.index("{")
        results = json.loads(result.output[start:])
        assert results["cookies"]["size"] == 300
        assert results["total"]["items"] == 8

    def test_table_scan_with_config_file(self, runner: CliRunner, tmp_path: Path, safari_home: Path) -> None:
        """Test a console scan configured from a YAML file."""
        config_file = tmp_path / "scanner.yaml"
        _ = config_file.write_text(
            "targets:\n"
            f"  - name: cookies\n    path: {safari_home / 'Library' / 'Cookies'}\n"
            "    label: Browsing cookies\n    icon: C\n"
            "scan:\n  category_delay: 0\n"
            "logging:\n  level: WARNING\n"
        )

        result = runner.invoke(cli, ["--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "C Browsing cookies:" in result.output
        assert "300.00 B | 2 items" in result.output

    def test_invalid_config_exits_with_error(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a configuration that fails validation."""
        config_file = tmp_path / "scanner.yaml"
        _ = config_file.write_text("server:\n  port: not-a-port\n")

        result = runner.invoke(cli, ["-c", str(config_file), "scan"])

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output
        assert "server.port" in result.output

    def test_environment_overrides(self, runner: CliRunner, tmp_path: Path, safari_home: Path) -> None:
        """Test targets supplied through the environment."""
        targets = json.dumps(
            [{"name": "cache", "path": str(safari_home / "Library" / "Caches" / "com.apple.Safari"), "label": "Cache"}]
        )

        with runner.isolated_filesystem():
            result = runner.invoke(
                cli,
                ["scan", "--json"],
                env={"SAFARI_SCANNER_TARGETS": targets, "SAFARI_SCANNER_LOGGING__LEVEL": "ERROR"},
            )

        assert result.exit_code == 0, result.output
        start = result.output.index("{")
        assert list(json.loads(result.output[start:])) == ["cache", "total"]
