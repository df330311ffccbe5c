"""Environment variable configuration loader."""

from __future__ import annotations

import json
import os
import re
from collections.abc import Mapping
from typing import cast

from ..exceptions import EnvLoadError

DEFAULT_ENV_PREFIX = "SAFARI_SCANNER_"

_INT_PATTERN = re.compile(r"[+-]?\d+")
_FLOAT_PATTERN = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")


class EnvLoader:
    """Environment variable loader with nesting and type conversion.

    ``SAFARI_SCANNER_SERVER__PORT=8080`` becomes ``{"server": {"port": 8080}}``.
    A double underscore separates nesting levels; single underscores stay part
    of the field name (``SCAN__CATEGORY_DELAY``).
    """

    def __init__(
        self,
        prefix: str = DEFAULT_ENV_PREFIX,
        convert_types: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize EnvLoader.

        Args:
            prefix: Prefix for environment variables to load
            convert_types: Whether to attempt automatic type conversion
            environ: Environment mapping to read (defaults to ``os.environ``)
        """
        self.prefix: str = prefix
        self.convert_types: bool = convert_types
        self._environ: Mapping[str, str] | None = environ

    def load(self) -> dict[str, object]:
        """Load configuration from environment variables.

        Returns:
            Dictionary containing the loaded configuration

        Raises:
            EnvLoadError: If a JSON-looking value cannot be parsed
        """
        environ = self._environ if self._environ is not None else os.environ
        config: dict[str, object] = {}

        for env_var in sorted(environ):
            if not env_var.startswith(self.prefix):
                continue

            config_key = env_var[len(self.prefix):]
            if not config_key:
                continue

            raw_value = environ[env_var]
            value: object = raw_value
            if self.convert_types:
                value = self._convert_value(raw_value, env_var)

            self._set_nested_value(config, config_key.lower().split("__"), value)

        return config

    def _convert_value(self, value: str, env_var: str) -> object:
        """Convert string value to appropriate Python type.

        Args:
            value: String value to convert
            env_var: Environment variable name (for error reporting)

        Returns:
            Converted value

        Raises:
            EnvLoadError: If JSON parsing fails
        """
        if not value:
            return value

        lower_value = value.lower()
        if lower_value in ("true", "yes", "on"):
            return True
        if lower_value in ("false", "no", "off"):
            return False

        # Plain numerals only; float() alone would also accept "inf" and "nan"
        if _INT_PATTERN.fullmatch(value):
            return int(value)
        if _FLOAT_PATTERN.fullmatch(value):
            return float(value)

        if value.startswith(("[", "{")):
            try:
                return cast(object, json.loads(value))
            except json.JSONDecodeError as e:
                raise EnvLoadError(f"Failed to parse JSON for {env_var}: {e}", env_var) from e

        return value

    def _set_nested_value(self, config: dict[str, object], keys: list[str], value: object) -> None:
        """Set a value in a nested dictionary.

        Args:
            config: Dictionary to modify
            keys: Path components, outermost first
            value: Value to set
        """
        current: dict[str, object] = config
        for key in keys[:-1]:
            child = current.get(key)
            if not isinstance(child, dict):
                child = {}
                current[key] = child
            current = child  # pyright: ignore[reportUnknownVariableType] # dict after isinstance check

        current[keys[-1]] = value
