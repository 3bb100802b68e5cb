"""
Logging configuration with a colored, tag-based console handler.

Usage:
    from config.logging import get_logger
    logger = get_logger("log")
    logger.info("State log ready", extra={"location": "empathos.db"})
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

# ANSI color codes for console output
COLORS = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[35m",  # Magenta
    "RESET": "\033[0m",
}

# Module-specific colors for tags
TAG_COLORS = {
    "store": "\033[95m",  # Magenta
    "cache": "\033[96m",  # Cyan
    "log": "\033[94m",  # Blue
    "db": "\033[92m",  # Green
    "config": "\033[93m",  # Yellow
    "cli": "\033[97m",  # White
}


class ColoredConsoleFormatter(logging.Formatter):
    """Formatter that adds colors and a [tag] taken from the logger name."""

    def format(self, record: logging.LogRecord) -> str:
        level_color = COLORS.get(record.levelname, "")
        reset = COLORS["RESET"]

        tag = record.name
        tag_color = TAG_COLORS.get(tag, "\033[37m")

        timestamp = datetime.now().strftime("%H:%M:%S")
        level_str = f"{level_color}{record.levelname:8}{reset}"
        tag_str = f"{tag_color}[{tag}]{reset}"

        extra_parts = []
        if getattr(record, "record_id", None) is not None:
            extra_parts.append(f"record_id={record.record_id}")
        if getattr(record, "location", None):
            extra_parts.append(f"location={record.location}")

        extra_str = f" ({', '.join(extra_parts)})" if extra_parts else ""
        msg = f"{timestamp} {level_str} {tag_str} {record.getMessage()}{extra_str}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


_initialized = False


def _get_console_level() -> int:
    """Get console log level from environment variable."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def init_logging(console_level: int | None = None):
    """Initialize the logging system with a colored console handler."""
    global _initialized

    if _initialized:
        return

    if console_level is None:
        console_level = _get_console_level()

    # Clear any existing handlers on root logger (from basicConfig or other sources)
    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ColoredConsoleFormatter())

    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    if not _initialized:
        init_logging()
    return logging.getLogger(name)
