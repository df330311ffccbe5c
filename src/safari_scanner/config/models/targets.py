"""Scan target configuration models and the default Safari locations."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator

from safari_scanner.types.models import ScanTarget

from .base import BaseConfig

# (name, path relative to the home directory, label, icon), in scan order
SAFARI_LOCATIONS: tuple[tuple[str, str, str, str], ...] = (
    ("cookies", "Library/Cookies", "Browsing cookies", "🍪"),
    ("cache", "Library/Caches/com.apple.Safari", "Browser cache", "📦"),
    ("history", "Library/Safari", "Website history", "📜"),
    ("localStorage", "Library/Safari/LocalStorage", "Local storage", "💾"),
    ("databases", "Library/Safari/Databases", "Web databases", "🗄️"),
)


class TargetConfig(BaseConfig):
    """Configuration for one scan category."""

    name: str = Field(
        min_length=1,
        pattern=r"^[A-Za-z0-9_]+$",
        description="Unique category key",
    )
    path: Path = Field(
        description="Root directory of the category (~ is expanded)",
    )
    label: str = Field(
        min_length=1,
        description="Human-readable category description",
    )
    icon: str = Field(
        default="",
        description="Glyph shown next to the category in console output",
    )

    @field_validator("path", mode="after")
    @classmethod
    def validate_path_absolute(cls, v: Path) -> Path:
        """Expand ``~`` and require an absolute path."""
        expanded = v.expanduser()
        if not expanded.is_absolute():
            msg = f"Target path must be absolute: {v}"
            raise ValueError(msg)
        return expanded

    def to_scan_target(self) -> ScanTarget:
        """Build the immutable scan target used by the orchestrator."""
        return ScanTarget(name=self.name, path=self.path, label=self.label, icon=self.icon)


def default_targets(home: Path | None = None) -> list[TargetConfig]:
    """Build the default Safari targets under a home directory.

    Args:
        home: Home directory to resolve against (defaults to ``Path.home()``)

    Returns:
        Target configurations in scan order
    """
    base = home if home is not None else Path.home()
    return [
        TargetConfig(name=name, path=base / relative, label=label, icon=icon)
        for name, relative, label, icon in SAFARI_LOCATIONS
    ]
