"""
Base exception types for aicomponents.

Subclass ProjectError or use exception_factory() to add new exception types
on demand. Every error carries a machine-readable code, free-form details and
the chained cause, so callers can log ``to_dict()`` without parsing messages.
"""
from __future__ import annotations

import traceback
from typing import Any, Optional, Type


class ProjectError(Exception):
    """
    Base exception for all component errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable slug (defaults to the class ``default_code``).
        details: Optional dict for extra context (collection, batch, ...).
        cause: Optional underlying exception; also set as ``__cause__``.
    """

    default_code: str = "ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else getattr(
            self.__class__, "default_code", self.__class__.__name__
        )
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r})"

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        out: dict[str, Any] = {
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            out["details"] = self.details
        if self.cause is not None:
            out["cause"] = str(self.cause)
            out["cause_traceback"] = traceback.format_exception(
                type(self.cause), self.cause, self.cause.__traceback__
            )
        return out


def exception_factory(
    name: str,
    *,
    code: Optional[str] = None,
    base: Type[ProjectError] = ProjectError,
) -> Type[ProjectError]:
    """
    Create a new exception class on demand.

    Example:
        RetrieverError = exception_factory("RetrieverError", base=VectorstoreError)
        raise RetrieverError("search failed", details={"collection": "kb"})
    """
    code = code or name.upper().replace(" ", "_")
    return type(name, (base,), {"default_code": code})
