"""Logging configuration package."""

from .logger import configure_file_logging, get_logger, logger

__all__ = ["configure_file_logging", "get_logger", "logger"]
