"""Top-level configuration model for safari-scanner."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator

from safari_scanner.types.models import ScanTarget

from .base import BaseConfig, LogLevel
from .targets import TargetConfig, default_targets


class ScanConfig(BaseConfig):
    """Configuration for scan behavior."""

    category_delay: float = Field(
        default=0.1,
        ge=0.0,
        le=10.0,
        description="Pause in seconds before each category, for live progress pacing",
    )
    record_files: bool = Field(
        default=False,
        description="Keep a record of every visited file in the results",
    )


class ServerConfig(BaseConfig):
    """Configuration for the HTTP server."""

    host: str = Field(
        default="localhost",
        min_length=1,
        description="Interface to bind",
    )
    port: int = Field(
        default=3001,
        ge=1,
        le=65535,
        description="TCP port to listen on",
    )
    static_dir: Path | None = Field(
        default=None,
        description="Directory served at / (disabled when unset)",
    )
    cors_origin: str = Field(
        default="*",
        min_length=1,
        description="Value of the Access-Control-Allow-Origin header",
    )

    @field_validator("static_dir", mode="after")
    @classmethod
    def validate_static_dir(cls, v: Path | None) -> Path | None:
        """Validate that the static directory exists."""
        if v is None:
            return v
        expanded = v.expanduser()
        if not expanded.is_dir():
            msg = f"Static directory does not exist: {v}"
            raise ValueError(msg)
        return expanded


class LoggingConfig(BaseConfig):
    """Configuration for logging."""

    level: LogLevel = Field(
        default="INFO",
        description="Log level",
    )
    file: Path | None = Field(
        default=None,
        description="Optional rotating log file",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class ScannerConfig(BaseConfig):
    """Complete safari-scanner configuration."""

    targets: list[TargetConfig] = Field(
        default_factory=default_targets,
        min_length=1,
        description="Categories to scan, in order",
    )
    scan: ScanConfig = Field(default_factory=ScanConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("targets", mode="after")
    @classmethod
    def validate_unique_names(cls, v: list[TargetConfig]) -> list[TargetConfig]:
        """Validate that target names are unique."""
        seen: set[str] = set()
        for target in v:
            if target.name in seen:
                msg = f"Duplicate target name: {target.name}"
                raise ValueError(msg)
            seen.add(target.name)
        return v

    def scan_targets(self) -> tuple[ScanTarget, ...]:
        """Immutable scan targets in configured order."""
        return tuple(target.to_scan_target() for target in self.targets)
