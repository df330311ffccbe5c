"""Tests for CLI interface."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from safari_scanner.app.cli import cli
from safari_scanner.config import ConfigLoadError


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def mock_runner() -> Iterator[MagicMock]:
    """Patch ApplicationRunner and make every command succeed."""
    with patch("safari_scanner.app.runner.ApplicationRunner") as mock_class:
        instance = MagicMock()
        instance.run_scan.return_value = 0
        instance.serve.return_value = 0
        mock_class.return_value = instance
        yield mock_class


class TestCLIBasicFunctionality:
    """Test basic CLI functionality."""

    def test_cli_help_command(self, runner: CliRunner) -> None:
        """Test CLI help command displays correctly."""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "Safari Storage Scanner" in result.output
        assert "--config" in result.output
        assert "--log-level" in result.output
        assert "scan" in result.output
        assert "serve" in result.output

    def test_cli_version_command(self, runner: CliRunner) -> None:
        """Test CLI version command displays correctly."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "version" in result.output.lower()

    def test_default_invocation_scans(self, runner: CliRunner, mock_runner: MagicMock) -> None:
        """Test that running without a subcommand performs a scan."""
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        mock_runner.assert_called_once_with(config_path=None, log_level=None)
        mock_runner.return_value.run_scan.assert_called_once_with(json_output=False)

    def test_scan_json(self, runner: CliRunner, mock_runner: MagicMock) -> None:
        """Test the JSON output flag."""
        result = runner.invoke(cli, ["scan", "--json"])

        assert result.exit_code == 0
        mock_runner.return_value.run_scan.assert_called_once_with(json_output=True)

    def test_scan_failure_exit_code(self, runner: CliRunner, mock_runner: MagicMock) -> None:
        """Test that the runner's exit code is returned."""
        mock_runner.return_value.run_scan.return_value = 1

        result = runner.invoke(cli, ["scan"])

        assert result.exit_code == 1

    def test_config_option(self, runner: CliRunner, mock_runner: MagicMock) -> None:
        """Test CLI with config file option."""
        with runner.isolated_filesystem():
            config_path = Path("scanner.yaml")
            _ = config_path.write_text("scan:\n  category_delay: 0\n")

            result = runner.invoke(cli, ["-c", str(config_path), "scan"])

        assert result.exit_code == 0
        assert mock_runner.call_args.kwargs["config_path"] == config_path

    def test_config_option_requires_yaml_extension(self, runner: CliRunner) -> None:
        """Test that non-YAML config paths are rejected."""
        result = runner.invoke(cli, ["--config", "settings.json"])

        assert result.exit_code == 2
        assert ".yaml or .yml" in result.output

    def test_config_option_rejects_directory(self, runner: CliRunner) -> None:
        """Test that a directory is not accepted as config file."""
        with runner.isolated_filesystem():
            Path("conf.yaml").mkdir()

            result = runner.invoke(cli, ["--config", "conf.yaml"])

        assert result.exit_code == 2
        assert "not a directory" in result.output

    @pytest.mark.parametrize("level", ["debug", "INFO", " Warning "])
    def test_log_level_normalized(self, runner: CliRunner, mock_runner: MagicMock, level: str) -> None:
        """Test that log levels are upper-cased."""
        result = runner.invoke(cli, ["--log-level", level, "scan"])

        assert result.exit_code == 0
        assert mock_runner.call_args.kwargs["log_level"] == level.strip().upper()

    def test_log_level_invalid(self, runner: CliRunner) -> None:
        """Test that unknown log levels are rejected."""
        result = runner.invoke(cli, ["-l", "LOUD"])

        assert result.exit_code == 2
        assert "Invalid log level" in result.output

    def test_config_error_reported(self, runner: CliRunner, mock_runner: MagicMock) -> None:
        """Test that configuration errors exit with a suggestion."""
        mock_runner.return_value.run_scan.side_effect = ConfigLoadError(
            "Configuration file not found: missing.yaml", file_path="missing.yaml"
        )

        result = runner.invoke(cli, ["scan"])

        assert result.exit_code == 1
        assert "Configuration file not found" in result.output
        assert "Check that the file exists" in result.output


class TestServeCommand:
    """Test the serve subcommand."""

    def test_serve_defaults(self, runner: CliRunner, mock_runner: MagicMock) -> None:
        """Test that no overrides are passed without options."""
        result = runner.invoke(cli, ["serve"])

        assert result.exit_code == 0
        assert mock_runner.call_args.kwargs["overrides"] is None
        mock_runner.return_value.serve.assert_called_once_with()

    def test_serve_overrides(self, runner: CliRunner, mock_runner: MagicMock, tmp_path: Path) -> None:
        """Test that server options become configuration overrides."""
        result = runner.invoke(
            cli, ["serve", "--host", "0.0.0.0", "--port", "8080", "--static-dir", str(tmp_path)]
        )

        assert result.exit_code == 0
        assert mock_runner.call_args.kwargs["overrides"] == {
            "server": {"host": "0.0.0.0", "port": 8080, "static_dir": str(tmp_path)}
        }

    def test_serve_rejects_bad_port(self, runner: CliRunner) -> None:
        """Test port range checking."""
        result = runner.invoke(cli, ["serve", "--port", "0"])

        assert result.exit_code == 2
