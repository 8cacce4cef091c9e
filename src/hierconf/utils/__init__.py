"""Shared utilities for logging and secret sanitization."""

from hierconf.utils.logging import (
    DEFAULT_LOG_FORMAT,
    ConsoleHandler,
    SecretRedactingFilter,
    configure_logging,
)
from hierconf.utils.sanitization import (
    REDACTED,
    is_sensitive_field,
    sanitize_args,
    sanitize_mapping,
    sanitize_url,
    sanitize_value,
)

__all__ = [
    "DEFAULT_LOG_FORMAT",
    "REDACTED",
    "ConsoleHandler",
    "SecretRedactingFilter",
    "configure_logging",
    "is_sensitive_field",
    "sanitize_args",
    "sanitize_mapping",
    "sanitize_url",
    "sanitize_value",
]
