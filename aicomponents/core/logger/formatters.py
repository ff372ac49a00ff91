"""
Formatters: JSON lines for files, plain text for the console.
"""
from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Optional

from aicomponents.core.exceptions import ProjectError


class JsonFormatter(logging.Formatter):
    """
    One JSON object per line. ProjectError exceptions also contribute their
    ``code`` and ``details`` so failures can be grouped without parsing text.
    """

    def __init__(self, *, include_extra: bool = True) -> None:
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        log_dict: dict[str, Any] = {
            "timestamp": _utc_iso(record.created),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            exc = record.exc_info[1]
            log_dict["exception"] = "".join(traceback.format_exception(*record.exc_info)).strip()
            if isinstance(exc, ProjectError):
                log_dict["error_code"] = exc.code
                if exc.details:
                    log_dict["error_details"] = exc.details
        if record.lineno:
            log_dict["lineno"] = record.lineno
        if self.include_extra and getattr(record, "extra", None):
            log_dict["extra"] = record.extra
        return json.dumps(log_dict, default=str, ensure_ascii=False)


def _utc_iso(created: float) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).isoformat()


class PlainConsoleFormatter(logging.Formatter):
    """Human-readable format for the console."""

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None) -> None:
        super().__init__(
            fmt=fmt or "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt=datefmt or "%Y-%m-%d %H:%M:%S",
        )
