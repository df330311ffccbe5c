"""Error handling for the configuration system."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for all configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:  # pyright: ignore[reportExplicitAny] # Flexible config error context
        """Initialize ConfigError.

        Args:
            message: Error message
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.context: dict[str, Any] = context or {}  # pyright: ignore[reportExplicitAny] # Flexible config error context


class ConfigLoadError(ConfigError):
    """Exception raised when a configuration file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny] # Flexible config error context
    ) -> None:
        """Initialize ConfigLoadError.

        Args:
            message: Error message
            file_path: Path to the configuration file that failed to load
            context: Additional context information
        """
        full_context = context or {}
        if file_path is not None:
            full_context["file_path"] = file_path

        super().__init__(message, full_context)
        self.file_path: str | None = file_path


class EnvLoadError(ConfigError):
    """Exception raised when an environment variable override is malformed."""

    def __init__(
        self,
        message: str,
        env_var: str | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny] # Flexible config error context
    ) -> None:
        """Initialize EnvLoadError.

        Args:
            message: Error message
            env_var: Environment variable name that caused the error
            context: Additional context information
        """
        full_context = context or {}
        if env_var is not None:
            full_context["env_var"] = env_var

        super().__init__(message, full_context)
        self.env_var: str | None = env_var


class ConfigMergeError(ConfigError):
    """Exception raised during configuration merging operations."""

    def __init__(
        self,
        message: str,
        config_path: str = "",
        context: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny] # Flexible config error context
    ) -> None:
        """Initialize ConfigMergeError.

        Args:
            message: Error message
            config_path: Path to the configuration field that caused the error
            context: Additional context information
        """
        full_context = context or {}
        if config_path:
            full_context["config_path"] = config_path

        super().__init__(message, full_context)
        self.config_path: str = config_path


class ConfigValidationError(ConfigError):
    """Exception raised when merged configuration fails model validation."""

    def __init__(
        self,
        message: str,
        pydantic_error: ValidationError | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny] # Flexible config error context
    ) -> None:
        """Initialize ConfigValidationError.

        Args:
            message: Error message
            pydantic_error: Original Pydantic ValidationError
            context: Additional context information
        """
        full_context = context or {}
        if pydantic_error is not None:
            full_context["validation_errors"] = format_validation_errors(pydantic_error)

        super().__init__(message, full_context)
        self.pydantic_error: ValidationError | None = pydantic_error


def format_validation_errors(error: ValidationError) -> list[dict[str, object]]:
    """Flatten Pydantic validation errors into field/message pairs.

    Args:
        error: Pydantic ValidationError

    Returns:
        List of dictionaries with ``field``, ``message`` and ``type`` keys
    """
    return [
        {
            "field": ".".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]


def handle_config_error(error: Exception, operation: str) -> ConfigError:
    """Wrap an exception raised while configuring in a ConfigError.

    Args:
        error: Original exception
        operation: Description of the operation that failed

    Returns:
        The error itself if it already is a ConfigError, otherwise a wrapper
    """
    logger.debug("Configuration error during %s: %s", operation, error, exc_info=True)

    if isinstance(error, ConfigError):
        return error

    if isinstance(error, ValidationError):
        wrapped: ConfigError = ConfigValidationError(
            f"Configuration validation failed during {operation}",
            pydantic_error=error,
        )
    else:
        wrapped = ConfigError(
            f"Configuration error during {operation}: {error}",
            context={"operation": operation, "original_error_type": type(error).__name__},
        )
    wrapped.__cause__ = error
    return wrapped


def suggest_config_fix(error: ConfigError) -> str | None:
    """Suggest a fix for a configuration error.

    Args:
        error: Configuration error

    Returns:
        Suggested fix or None if no suggestion is available
    """
    if isinstance(error, ConfigLoadError):
        if error.file_path:
            return f"Check that the file exists and is readable: {error.file_path}"
        return "Check that the configuration file exists and is readable"

    if isinstance(error, EnvLoadError):
        if error.env_var:
            return f"Check the format and value of environment variable: {error.env_var}"
        return "Check the format and values of environment variables"

    if isinstance(error, ConfigValidationError) and error.pydantic_error:
        errors = error.pydantic_error.errors()
        if len(errors) == 1:
            field_path = ".".join(str(loc) for loc in errors[0]["loc"])
            return f"Fix validation error in field '{field_path}': {errors[0]['msg']}"
        return f"Fix {len(errors)} validation errors in the configuration"

    if isinstance(error, ConfigMergeError):
        if error.config_path:
            return f"Check the type of configuration source: {error.config_path}"
        return "Check for type conflicts between configuration sources"

    return None
