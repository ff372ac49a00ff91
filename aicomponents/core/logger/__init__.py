"""
Package logger: console + optional rotating JSON file, configured once.

Usage:
    from aicomponents.core.logger import configure, LoggerConfig

    # Explicit config at startup
    configure(LoggerConfig(level="DEBUG", log_dir="/var/log/indexer"))

    # Or from env: LOG_LEVEL, LOG_DIR, LOG_FILE_BASENAME, LOG_MAX_BYTES, ...
    configure()

Library modules only call ``logging.getLogger(__name__)``; nothing is emitted
until the application calls ``configure()``.
"""
from aicomponents.core.logger.config import LoggerConfig
from aicomponents.core.logger.formatters import JsonFormatter, PlainConsoleFormatter
from aicomponents.core.logger.setup import (
    ROOT_LOGGER_NAME,
    build_console_handler,
    build_rotating_file_handler,
    configure,
    get_logger,
)

__all__ = [
    "LoggerConfig",
    "JsonFormatter",
    "PlainConsoleFormatter",
    "ROOT_LOGGER_NAME",
    "configure",
    "get_logger",
    "build_rotating_file_handler",
    "build_console_handler",
]
