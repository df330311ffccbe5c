"""Configuration merging for combining defaults, file and environment sources."""

from __future__ import annotations

import copy
from typing import Any

from ..exceptions import ConfigMergeError

ConfigDict = dict[str, Any]  # pyright: ignore[reportExplicitAny] # Config systems need flexible types


class ConfigMerger:
    """Deep-merge configuration sources with later sources taking precedence.

    Nested dictionaries merge key by key; every other value, lists included,
    is replaced wholesale. The merger can record which source supplied each
    dotted configuration path.
    """

    def __init__(self, track_sources: bool = False) -> None:
        """Initialize ConfigMerger.

        Args:
            track_sources: Whether to record the source of every merged key
        """
        self._track_sources: bool = track_sources
        self._audit_trail: dict[str, str] = {}

    def merge(self, base: object, override: object, source_name: str = "override") -> ConfigDict:
        """Merge two configuration dictionaries with override precedence.

        Args:
            base: Base configuration dictionary
            override: Override configuration dictionary (takes precedence)
            source_name: Name recorded in the audit trail for override keys

        Returns:
            Merged configuration dictionary; inputs are left untouched

        Raises:
            ConfigMergeError: If either source is not a dictionary
        """
        if not isinstance(base, dict):
            raise ConfigMergeError("Base configuration must be a dictionary")
        if not isinstance(override, dict):
            raise ConfigMergeError("Override configuration must be a dictionary")

        result: ConfigDict = copy.deepcopy(base)  # pyright: ignore[reportUnknownArgumentType] # dict after isinstance check
        self._deep_merge(result, override, source_name, "")  # pyright: ignore[reportUnknownArgumentType] # dict after isinstance check
        return result

    def merge_sources(self, sources: list[tuple[str, object]]) -> ConfigDict:
        """Merge named sources left to right.

        Args:
            sources: ``(name, config)`` pairs, lowest precedence first

        Returns:
            Merged configuration dictionary

        Raises:
            ConfigMergeError: If any source is not a dictionary
        """
        result: ConfigDict = {}
        for name, source in sources:
            if not isinstance(source, dict):
                raise ConfigMergeError(f"Source '{name}' must be a dictionary", config_path=name)
            self._deep_merge(result, source, name, "")  # pyright: ignore[reportUnknownArgumentType] # dict after isinstance check
        return result

    def _deep_merge(self, target: ConfigDict, source: ConfigDict, source_name: str, path: str) -> None:
        for key, value in source.items():  # pyright: ignore[reportAny]
            current_path = f"{path}.{key}" if path else key

            if isinstance(value, dict):
                if not isinstance(target.get(key), dict):
                    # Only leaves are assigned, so only leaves appear in the audit trail
                    target[key] = {}
                    _ = self._audit_trail.pop(current_path, None)
                self._deep_merge(target[key], value, source_name, current_path)  # pyright: ignore[reportAny, reportUnknownArgumentType]
                continue

            target[key] = copy.deepcopy(value)  # pyright: ignore[reportAny]
            if self._track_sources:
                self._audit_trail[current_path] = source_name

    def get_audit_trail(self) -> dict[str, str]:
        """Get the source that supplied each merged configuration path.

        Returns:
            Dictionary mapping dotted configuration paths to source names
        """
        return self._audit_trail.copy()
