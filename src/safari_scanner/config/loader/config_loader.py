"""Configuration loader combining defaults, a YAML file and the environment."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from ..exceptions import ConfigLoadError, handle_config_error
from ..manager.config_merger import ConfigMerger
from ..models import ScannerConfig
from .env_loader import DEFAULT_ENV_PREFIX, EnvLoader
from .yaml_loader import YamlLoader

logger = logging.getLogger(__name__)

# Searched in order when no configuration file is given explicitly
LOCAL_CONFIG_FILES: tuple[str, ...] = ("safari-scanner.yaml", "safari-scanner.yml", "config.yaml")
USER_CONFIG_FILE: Path = Path(".config") / "safari-scanner" / "config.yaml"


def discover_config_file(search_dir: Path | None = None, home: Path | None = None) -> Path | None:
    """Find a configuration file in the standard locations.

    Search order:
    1. ``safari-scanner.yaml``, ``safari-scanner.yml``, ``config.yaml`` in
       ``search_dir`` (defaults to the current directory)
    2. ``~/.config/safari-scanner/config.yaml``

    Args:
        search_dir: Directory searched first
        home: Home directory (defaults to ``Path.home()``)

    Returns:
        Path of the first file found, or None
    """
    base = search_dir if search_dir is not None else Path.cwd()
    for name in LOCAL_CONFIG_FILES:
        candidate = base / name
        if candidate.is_file():
            return candidate

    try:
        home_dir = home if home is not None else Path.home()
    except (OSError, RuntimeError):
        # Path.home() can fail when HOME is unset
        return None

    candidate = home_dir / USER_CONFIG_FILE
    return candidate if candidate.is_file() else None


class ConfigLoader:
    """Loader producing a validated ScannerConfig.

    Precedence, lowest first: model defaults, YAML file, environment
    variables, explicit overrides (typically CLI options).
    """

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
        discover: bool = True,
    ) -> None:
        """Initialize configuration loader.

        Args:
            config_path: Explicit configuration file; must exist when given
            env_prefix: Prefix of environment variable overrides
            environ: Environment mapping to read (defaults to ``os.environ``)
            discover: Search standard locations when ``config_path`` is None
        """
        self.config_path: Path | None = config_path
        self.discover: bool = discover
        self.yaml_loader: YamlLoader = YamlLoader()
        self.env_loader: EnvLoader = EnvLoader(prefix=env_prefix, environ=environ)
        self.merger: ConfigMerger = ConfigMerger(track_sources=True)

    def resolve_config_path(self) -> Path | None:
        """Determine which configuration file to read.

        Returns:
            Path to load, or None to run on defaults

        Raises:
            ConfigLoadError: If an explicit path does not exist
        """
        if self.config_path is not None:
            if not self.config_path.is_file():
                raise ConfigLoadError(
                    f"Configuration file not found: {self.config_path}",
                    file_path=str(self.config_path),
                )
            return self.config_path

        if self.discover:
            return discover_config_file()
        return None

    def load(self, overrides: Mapping[str, object] | None = None) -> ScannerConfig:
        """Load and validate the complete configuration.

        Args:
            overrides: Highest-precedence values, nested like the config file

        Returns:
            Validated configuration

        Raises:
            ConfigError: If any source fails to load, merge or validate
        """
        try:
            path = self.resolve_config_path()
            file_config: dict[str, object] = {}
            if path is not None:
                logger.debug("Loading configuration from %s", path)
                file_config = self.yaml_loader.load(path)

            merged = self.merger.merge_sources(
                [
                    ("file", file_config),
                    ("env", self.env_loader.load()),
                    ("cli", dict(overrides or {})),
                ]
            )
            config = ScannerConfig.model_validate(merged)
        except ValidationError as e:
            raise handle_config_error(e, "configuration loading") from e

        for config_path, source in sorted(self.merger.get_audit_trail().items()):
            if source != "file":
                logger.debug("Configuration %s overridden from %s", config_path, source)
        return config
