"""System logger for operational events.

This module provides a singleton system logger for registry mutations,
engine failures, rejected credentials and unexpected request errors.

Logging strategy:
- Console (stderr): everything at or above the configured level
- File (JSONL): only issues (WARNING, ERROR, CRITICAL)

The file handler is configured separately via configure_system_logger_file()
once the log path from config is known.
"""

from __future__ import annotations

__all__ = [
    "configure_system_logger_file",
    "get_system_logger",
    "set_system_log_level",
]

import logging
import sys
from pathlib import Path

from varnish_agent.constants import APP_NAME
from varnish_agent.telemetry.formatters import ConsoleFormatter, ISO8601Formatter

# Module-level singleton logger
_system_logger: logging.Logger | None = None
_file_handler_configured: bool = False


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Creates the logger on first call with a stderr handler only.
    Messages are dicts with at least "event" and "message" keys.

    Returns:
        Configured system logger instance.

    Example:
        >>> logger = get_system_logger()
        >>> logger.warning({"event": "director_persist_failed", "message": "..."})
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(logging.INFO)
    _system_logger.propagate = False

    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def set_system_log_level(level: str) -> None:
    """Set the system logger level from a level name ("DEBUG", "INFO", ...)."""
    get_system_logger().setLevel(level.upper())


def configure_system_logger_file(log_path: Path) -> None:
    """Add a JSONL file handler (WARNING and above) to the system logger.

    Only the first call has an effect.

    Args:
        log_path: Path to the system log file.

    Raises:
        OSError: If the log directory cannot be created or the file opened.
    """
    global _file_handler_configured

    if _file_handler_configured:
        return

    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(ISO8601Formatter())
    get_system_logger().addHandler(file_handler)

    _file_handler_configured = True
