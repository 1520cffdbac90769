"""Logging infrastructure for Skill-Forge."""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from skill_forge.core.constants import SETTINGS_DIR_NAME

LOGGER_NAME = "Skill-Forge"
PACKAGE_LOGGER_NAME = "skill_forge"

# Log level mapping for environment variable
LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_DIR_NAME = "logs"
LOG_FILE_NAME = "skillforge.log"

MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_level_from_env() -> int:
    """Get logging level from FORGE_LOG_LEVEL environment variable.

    Returns:
        Logging level constant. Defaults to WARNING if not set or invalid.
    """
    level_str = os.environ.get("FORGE_LOG_LEVEL", "WARNING").upper()
    return LOG_LEVEL_MAP.get(level_str, logging.WARNING)


def get_default_log_file() -> Path:
    """Get ~/.skillforge/logs/skillforge.log, creating the directory if needed."""
    log_dir = Path.home() / SETTINGS_DIR_NAME / LOG_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / LOG_FILE_NAME


def setup_logging(
    level: int | None = None,
    log_file: Path | None = None,
    console_output: bool = True,
    rich_console: bool = True,
    file_logging: bool = True,
) -> None:
    """Configure logging for Skill-Forge.

    The console level is taken from, in order: the explicit ``level``
    argument, the FORGE_LOG_LEVEL environment variable, WARNING.
    The file handler always records DEBUG and rotates at MAX_LOG_SIZE.

    Args:
        level: Console logging level.
        log_file: Custom file path for log output. If None, uses default.
        console_output: Show logs on console.
        rich_console: Use Rich for console formatting.
        file_logging: Write logs to file.
    """
    handlers: list[logging.Handler] = []

    if level is None:
        level = get_log_level_from_env()

    if file_logging:
        if log_file is None:
            log_file = get_default_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    if console_output:
        if rich_console:
            console_handler: logging.Handler = RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_time=False,
                show_path=False,
                level=level,
            )
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            console_handler.setLevel(level)
        handlers.append(console_handler)

    # Module loggers live under the package name, CLI loggers under LOGGER_NAME
    for name in (LOGGER_NAME, PACKAGE_LOGGER_NAME):
        root_logger = logging.getLogger(name)
        root_logger.setLevel(logging.DEBUG)

        # Remove existing handlers to avoid duplicates
        root_logger.handlers.clear()

        for handler in handlers:
            root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger prefixed with 'Skill-Forge.'."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
