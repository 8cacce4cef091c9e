"""Logging setup with secret redaction.

Library modules only create module-level loggers; handlers are
installed by the host program, optionally through ``configure_logging``.
"""

import logging
import sys
from collections.abc import Mapping
from typing import Final, override

from hierconf.utils.sanitization import sanitize_args, sanitize_mapping, sanitize_value

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord has; anything else arrived through ``extra``
_STANDARD_RECORD_ATTRS: Final[frozenset[str]] = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class ConsoleHandler(logging.StreamHandler):  # pyright: ignore[reportMissingTypeArgument]
    """Console handler installed by ``configure_logging``."""


class SecretRedactingFilter(logging.Filter):
    """Logging filter that redacts secrets from messages, arguments and extras."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Sanitize sensitive information from a log record.

        Args:
            record: Log record to sanitize

        Returns:
            True to allow the record to be logged (always)
        """
        if isinstance(record.msg, str):
            sanitized_msg = sanitize_value(record.msg)
            if isinstance(sanitized_msg, str):
                record.msg = sanitized_msg

        # record.args is a tuple, or a mapping for %(name)s formatting
        if isinstance(record.args, tuple):
            record.args = sanitize_args(record.args)
        elif isinstance(record.args, Mapping):
            record.args = sanitize_mapping(record.args)

        for attr_name in list(record.__dict__):
            if attr_name not in _STANDARD_RECORD_ATTRS and not attr_name.startswith("_"):
                attr_value: object = getattr(record, attr_name)  # pyright: ignore[reportAny]
                setattr(record, attr_name, sanitize_value(attr_value, field_name=attr_name))

        return True


def configure_logging(
    *,
    log_level: str = "INFO",
    enable_console: bool = True,
    log_format: str = DEFAULT_LOG_FORMAT,
    logger_name: str = "hierconf",
) -> logging.Logger:
    """Configure the package logger with console output and secret redaction.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_console: Attach a stderr handler
        log_format: Format string for the console handler
        logger_name: Logger to configure (defaults to the package logger)

    Returns:
        The configured logger

    Raises:
        ValueError: If the log level is unknown

    Example:
        >>> logger = configure_logging(log_level="DEBUG", enable_console=False, logger_name="hierconf.example")
        >>> logger.name
        'hierconf.example'
        >>> logger.getEffectiveLevel() == logging.DEBUG
        True
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    package_logger = logging.getLogger(logger_name)
    package_logger.setLevel(level)

    # Remove handlers installed by a previous call
    for handler in list(package_logger.handlers):
        if isinstance(handler, ConsoleHandler):
            package_logger.removeHandler(handler)

    if enable_console:
        console_handler = ConsoleHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(log_format))
        console_handler.addFilter(SecretRedactingFilter())
        package_logger.addHandler(console_handler)

    return package_logger
