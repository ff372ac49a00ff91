"""
Logger setup: attach console and rotating JSON file handlers from config.
"""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from aicomponents.core.logger.config import LoggerConfig
from aicomponents.core.logger.formatters import JsonFormatter, PlainConsoleFormatter

ROOT_LOGGER_NAME = "aicomponents"

_default_config: Optional[LoggerConfig] = None


def configure(config: Optional[LoggerConfig] = None) -> logging.Logger:
    """
    Configure the package root logger. Uses LoggerConfig.from_env() when
    config is None. Safe to call again; previous handlers are replaced.
    """
    global _default_config
    if config is None:
        config = LoggerConfig.from_env()
    _default_config = config

    root = logging.getLogger(config.root_name or ROOT_LOGGER_NAME)
    root.setLevel(_level(config.level))
    root.handlers.clear()

    if config.console:
        root.addHandler(build_console_handler(config.level))

    if config.file_rotating and config.log_dir and config.log_dir.strip():
        try:
            root.addHandler(
                build_rotating_file_handler(
                    config.log_dir,
                    basename=config.log_file_basename,
                    max_bytes=config.max_bytes,
                    backup_count=config.backup_count,
                    level=config.level,
                )
            )
        except OSError:
            root.warning("Could not create log dir %s, skipping file handler", config.log_dir)

    root.propagate = False
    return root


def get_logger(name: str, config: Optional[LoggerConfig] = None) -> logging.Logger:
    """Return a logger, configuring the package root on first use."""
    if _default_config is None:
        configure(config)
    return logging.getLogger(name)


def build_rotating_file_handler(
    log_dir: str,
    basename: str = "aicomponents",
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
    level: str = "INFO",
) -> RotatingFileHandler:
    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(log_dir, f"{basename}.log"),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(_level(level))
    handler.setFormatter(JsonFormatter())
    return handler


def build_console_handler(level: str = "INFO", fmt: Optional[str] = None) -> logging.StreamHandler:
    handler = logging.StreamHandler()
    handler.setLevel(_level(level))
    handler.setFormatter(PlainConsoleFormatter(fmt=fmt))
    return handler


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)
