"""Error handling for the configuration aggregator."""

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


class DeserializationError(ConfigError):
    """Exception raised when bytes do not conform to a deserializer's format."""

    def __init__(
        self,
        message: str,
        deserializer: str | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny] # Flexible config error context
    ) -> None:
        """Initialize DeserializationError.

        Args:
            message: Error message
            deserializer: Name of the deserializer that rejected the data
            context: Additional context information
        """
        full_context = context or {}
        if deserializer is not None:
            full_context["deserializer"] = deserializer

        super().__init__(message, full_context)
        self.deserializer: str | None = deserializer


class UnknownDeserializerError(DeserializationError):
    """Exception raised when a deserializer name is not registered."""


class ResourceFetchError(ConfigError):
    """Exception raised when a file or network location cannot be read."""

    def __init__(
        self,
        message: str,
        location: str | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny] # Flexible config error context
    ) -> None:
        """Initialize ResourceFetchError.

        Args:
            message: Error message
            location: Path or URL that failed to load
            context: Additional context information
        """
        full_context = context or {}
        if location is not None:
            full_context["location"] = location

        super().__init__(message, full_context)
        self.location: str | None = location


class ConfigSettingsError(ConfigError):
    """Exception raised when manager settings fail validation."""

    def __init__(
        self,
        message: str,
        pydantic_error: ValidationError | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny] # Flexible config error context
    ) -> None:
        """Initialize ConfigSettingsError.

        Args:
            message: Error message
            pydantic_error: Original Pydantic ValidationError
            context: Additional context information
        """
        full_context = context or {}
        if pydantic_error is not None:
            full_context["validation_errors"] = self._format_validation_errors(pydantic_error)

        super().__init__(message, full_context)
        self.pydantic_error: ValidationError | None = pydantic_error

    def _format_validation_errors(self, error: ValidationError) -> list[dict[str, Any]]:  # pyright: ignore[reportExplicitAny] # Flexible error formatting
        """Format Pydantic validation errors for better readability.

        Args:
            error: Pydantic ValidationError

        Returns:
            List of formatted error dictionaries
        """
        formatted_errors: list[dict[str, Any]] = []  # pyright: ignore[reportExplicitAny] # Flexible error formatting
        for err in error.errors():
            formatted_errors.append({
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
            })
        return formatted_errors


def get_error_context(
    location: str | None = None,
    deserializer: str | None = None,
    path: str | None = None,
    **additional_info: Any,  # pyright: ignore[reportAny, reportExplicitAny] # Flexible additional context
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny] # Flexible error context
    """Build error context dictionary from provided information.

    Args:
        location: Path or URL of the configuration resource
        deserializer: Deserializer name
        path: Configuration tree path
        **additional_info: Additional context information

    Returns:
        Dictionary containing error context
    """
    context: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny] # Flexible error context

    if location is not None:
        context["location"] = location
    if deserializer is not None:
        context["deserializer"] = deserializer
    if path is not None:
        context["path"] = path

    context.update(additional_info)

    return context


def handle_config_error(error: Exception, operation: str) -> ConfigError:
    """Wrap arbitrary errors into the configuration error hierarchy.

    Args:
        error: Original exception
        operation: Description of the operation that failed

    Returns:
        Wrapped ConfigError instance
    """
    logger.debug("Configuration error during %s: %s", operation, error, exc_info=True)

    if isinstance(error, ConfigError):
        return error

    if isinstance(error, ValidationError):
        return ConfigSettingsError(
            f"Configuration settings are invalid during {operation}",
            pydantic_error=error,
        )

    wrapped_error = ConfigError(
        f"Configuration error during {operation}: {error}",
        context={"operation": operation, "original_error_type": type(error).__name__},
    )
    wrapped_error.__cause__ = error
    return wrapped_error


def log_config_error(error: ConfigError, level: int = logging.WARNING) -> None:
    """Log configuration error with its context.

    Args:
        error: Configuration error to log
        level: Logging level (default: WARNING)
    """
    message = str(error)
    if error.context:
        context_str = ", ".join(f"{k}={v}" for k, v in error.context.items())  # pyright: ignore[reportAny] # Flexible context values
        message = f"{message} (context: {context_str})"

    logger.log(level, message, exc_info=level >= logging.ERROR)
