"""Configuration models module with Pydantic models for configuration validation."""

from __future__ import annotations

from .base import BaseConfig, LogLevel
from .main import LoggingConfig, ScanConfig, ScannerConfig, ServerConfig
from .targets import SAFARI_LOCATIONS, TargetConfig, default_targets

__all__ = [
    "BaseConfig",
    "LogLevel",
    "LoggingConfig",
    "SAFARI_LOCATIONS",
    "ScanConfig",
    "ScannerConfig",
    "ServerConfig",
    "TargetConfig",
    "default_targets",
]
