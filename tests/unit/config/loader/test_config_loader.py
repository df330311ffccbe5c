"""Tests for the combined configuration loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from safari_scanner.config.exceptions import ConfigLoadError, ConfigValidationError, EnvLoadError
from safari_scanner.config.loader.config_loader import ConfigLoader, discover_config_file


class TestDiscoverConfigFile:
    """Test configuration file discovery."""

    def test_nothing_found(self, tmp_path: Path) -> None:
        """Test that None is returned when no file exists."""
        assert discover_config_file(search_dir=tmp_path, home=tmp_path / "home") is None

    def test_local_files_in_order(self, tmp_path: Path) -> None:
        """Test the precedence among local file names."""
        _ = (tmp_path / "config.yaml").write_text("")
        assert discover_config_file(search_dir=tmp_path, home=tmp_path) == tmp_path / "config.yaml"

        _ = (tmp_path / "safari-scanner.yml").write_text("")
        assert discover_config_file(search_dir=tmp_path, home=tmp_path) == tmp_path / "safari-scanner.yml"

        _ = (tmp_path / "safari-scanner.yaml").write_text("")
        assert discover_config_file(search_dir=tmp_path, home=tmp_path) == tmp_path / "safari-scanner.yaml"

    def test_user_config_fallback(self, tmp_path: Path) -> None:
        """Test the per-user configuration file."""
        home = tmp_path / "home"
        user_config = home / ".config" / "safari-scanner" / "config.yaml"
        user_config.parent.mkdir(parents=True)
        _ = user_config.write_text("")

        assert discover_config_file(search_dir=tmp_path / "empty", home=home) == user_config


class TestConfigLoader:
    """Test ConfigLoader."""

    def test_defaults_without_sources(self) -> None:
        """Test loading with no file and an empty environment."""
        config = ConfigLoader(environ={}, discover=False).load()

        assert config.server.port == 3001
        assert [t.name for t in config.targets][0] == "cookies"

    def test_file_values(self, tmp_path: Path) -> None:
        """Test that the YAML file overrides defaults."""
        config_file = tmp_path / "safari-scanner.yaml"
        _ = config_file.write_text(
            "targets:\n"
            f"  - name: cache\n    path: {tmp_path}\n    label: Browser cache\n"
            "server:\n  port: 9000\n"
        )

        config = ConfigLoader(config_file, environ={}).load()

        assert config.server.port == 9000
        assert [t.name for t in config.targets] == ["cache"]

    def test_precedence(self, tmp_path: Path) -> None:
        """Test file < environment < overrides."""
        config_file = tmp_path / "config.yaml"
        _ = config_file.write_text("server:\n  port: 9000\n  host: 0.0.0.0\nscan:\n  category_delay: 1\n")
        environ = {"SAFARI_SCANNER_SERVER__PORT": "9100", "SAFARI_SCANNER_SCAN__CATEGORY_DELAY": "2"}

        config = ConfigLoader(config_file, environ=environ).load({"server": {"port": 9200}})

        assert config.server.port == 9200
        assert config.server.host == "0.0.0.0"
        assert config.scan.category_delay == 2.0

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """Test that an explicitly named file must exist."""
        with pytest.raises(ConfigLoadError, match="Configuration file not found"):
            _ = ConfigLoader(tmp_path / "nope.yaml", environ={}).load()

    def test_discovery_uses_working_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a file in the working directory is picked up."""
        monkeypatch.chdir(tmp_path)
        _ = (tmp_path / "safari-scanner.yaml").write_text("logging:\n  level: debug\n")

        config = ConfigLoader(environ={}).load()

        assert config.logging.level == "DEBUG"

    def test_validation_error_is_wrapped(self, tmp_path: Path) -> None:
        """Test that model validation failures become ConfigValidationError."""
        config_file = tmp_path / "config.yaml"
        _ = config_file.write_text("server:\n  port: 70000\n")

        with pytest.raises(ConfigValidationError) as exc_info:
            _ = ConfigLoader(config_file, environ={}).load()

        errors = exc_info.value.context["validation_errors"]
        assert errors[0]["field"] == "server.port"

    def test_env_error_propagates(self) -> None:
        """Test that malformed environment values surface as EnvLoadError."""
        loader = ConfigLoader(environ={"SAFARI_SCANNER_TARGETS": "{broken"}, discover=False)

        with pytest.raises(EnvLoadError):
            _ = loader.load()
