"""Configuration management system for safari-scanner."""

from __future__ import annotations

from .exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigMergeError,
    ConfigValidationError,
    EnvLoadError,
    handle_config_error,
    suggest_config_fix,
)
from .loader import ConfigLoader, discover_config_file
from .models import ScannerConfig, TargetConfig, default_targets

__all__ = [
    # Exception classes
    "ConfigError",
    "ConfigLoadError",
    "ConfigMergeError",
    "ConfigValidationError",
    "EnvLoadError",
    # Utility functions
    "handle_config_error",
    "suggest_config_fix",
    # Loading and models
    "ConfigLoader",
    "ScannerConfig",
    "TargetConfig",
    "default_targets",
    "discover_config_file",
]
