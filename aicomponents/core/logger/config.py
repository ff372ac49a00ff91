"""
Logger configuration, built in code or from env.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

_TRUTHY = ("1", "true", "yes")
_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class LoggerConfig:
    """
    Configuration for the package logger.

    Use LoggerConfig.from_env() for env-based config, or build explicitly.
    """

    level: str = "INFO"
    # Directory for the rotating JSON file; None skips the file handler
    log_dir: Optional[str] = None
    log_file_basename: str = "aicomponents"
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 5
    # Handlers are attached here; "" means the package root
    root_name: str = ""
    console: bool = True
    file_rotating: bool = True

    def __post_init__(self) -> None:
        if self.level.upper() not in _LEVELS:
            raise ValueError(f"level must be one of {sorted(_LEVELS)}, got {self.level!r}")
        if self.max_bytes < 0 or self.backup_count < 0:
            raise ValueError("max_bytes and backup_count must not be negative")

    @classmethod
    def from_env(cls) -> "LoggerConfig":
        """Build config from LOG_* environment variables."""
        return cls(
            level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            log_dir=os.environ.get("LOG_DIR") or None,
            log_file_basename=os.environ.get("LOG_FILE_BASENAME", "aicomponents"),
            max_bytes=int(os.environ.get("LOG_MAX_BYTES", "5242880")),
            backup_count=int(os.environ.get("LOG_BACKUP_COUNT", "5")),
            root_name=os.environ.get("LOG_ROOT_NAME", ""),
            console=os.environ.get("LOG_CONSOLE", "true").lower() in _TRUTHY,
            file_rotating=os.environ.get("LOG_FILE_ROTATING", "true").lower() in _TRUTHY,
        )

    def with_overrides(self, **changes: object) -> "LoggerConfig":
        """Return a copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
