"""Centralized logging configuration using loguru."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Remove default handler
logger.remove()

# Add console handler with INFO level
logger.add(
    sys.stderr,
    level="INFO",
    format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    colorize=True,
)

_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def configure_file_logging(logs_dir: Path, level: str = "DEBUG") -> None:
    """Add rotating file handlers under ``logs_dir``.

    Args:
        logs_dir: Directory for log files (created if missing)
        level: Minimum level for the main log file
    """
    logs_dir = Path(logs_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        logs_dir / "tracktrail_{time}.log",
        rotation="50 MB",
        retention="10 days",
        level=level,
        format=_FILE_FORMAT,
        enqueue=True,  # Thread-safe logging
    )

    # Error-specific log file
    logger.add(
        logs_dir / "errors_{time}.log",
        rotation="10 MB",
        retention="30 days",
        level="ERROR",
        format=_FILE_FORMAT,
        enqueue=True,
    )


def get_logger(name: Optional[str] = None):
    """Get a logger instance with the given name.

    Args:
        name: Module name for the logger (usually __name__)

    Returns:
        Configured logger instance
    """
    if name:
        return logger.bind(name=name)
    return logger


__all__ = ["logger", "get_logger", "configure_file_logging"]
