"""
Logging configuration for subnet.

Library modules only log through ``logging.getLogger(__name__)`` and only
at DEBUG. Nothing is printed until the CLI, or an application embedding the
package, calls setup_logging() or configure_logging().

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler


LOGGER_NAME = "subnet"
DEFAULT_LOG_FILE = Path.home() / ".subnet" / "logs" / "subnet.log"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-16s | %(module_name)-10s | "
    "%(function_name)-18s | %(lineno)-4d | %(message)s"
)


class StructuredFormatter(logging.Formatter):
    """Pipe-separated records with module and function columns."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "module_name"):
            record.module_name = record.module
        if not hasattr(record, "function_name"):
            record.function_name = record.funcName
        return super().format(record)


def _console_handler() -> logging.Handler:
    # stderr, so command output on stdout stays pipeable
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _file_handler(log_file: str | None, max_bytes: int, backup_count: int) -> logging.Handler:
    log_path = Path(log_file) if log_file else DEFAULT_LOG_FILE
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(StructuredFormatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    max_bytes: int = 10485760,  # 10MB
    backup_count: int = 5,
    enable_console: bool = True,
    enable_file: bool = False,
) -> logging.Logger:
    """
    Attach handlers to the package logger, replacing any set up earlier.

    Args:
        level: Logging level name, case-insensitive
        log_file: Log file path (defaults to ~/.subnet/logs/subnet.log)
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep
        enable_console: Log to stderr
        enable_file: Log to the rotating file

    Returns:
        The "subnet" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    if enable_console:
        logger.addHandler(_console_handler())
    if enable_file:
        logger.addHandler(_file_handler(log_file, max_bytes, backup_count))

    logger.propagate = False
    return logger


def configure_logging(debug: bool = False, level: str = "WARNING", log_file: str | None = None) -> None:
    """Console logging at ``level`` (DEBUG with ``debug``), plus ``log_file`` if given."""
    setup_logging(
        level="DEBUG" if debug else level,
        log_file=log_file,
        enable_console=True,
        enable_file=log_file is not None,
    )
