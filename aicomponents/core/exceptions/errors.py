"""
Built-in exception types. Add new ones here or via exception_factory().
"""
from __future__ import annotations

from typing import Any, Optional

from aicomponents.core.exceptions.base import ProjectError


class ConfigurationError(ProjectError):
    """Invalid or missing component configuration."""

    default_code = "CONFIGURATION_ERROR"


class ExternalServiceError(ProjectError):
    """External service (embedding provider, chat API) failed."""

    default_code = "EXTERNAL_SERVICE_ERROR"


class EmbeddingError(ExternalServiceError):
    """Embedding provider failed or returned an unusable result."""

    default_code = "EMBEDDING_ERROR"


class DimensionMismatchError(EmbeddingError):
    """An embedding vector does not have the configured dimension."""

    default_code = "DIMENSION_MISMATCH"

    def __init__(self, expected: int, got: int, *, index: Optional[int] = None, **kwargs: Any) -> None:
        where = f" at position {index}" if index is not None else ""
        super().__init__(
            f"Embedding vector{where} has dimension {got}, expected {expected}",
            details={"expected": expected, "got": got, "index": index},
            **kwargs,
        )
        self.expected = expected
        self.got = got


class VectorstoreError(ProjectError):
    """Vector database (Qdrant) operation failed."""

    default_code = "VECTORSTORE_ERROR"


class CollectionError(VectorstoreError):
    """Collection existence check or creation failed."""

    default_code = "COLLECTION_ERROR"


class UpsertError(VectorstoreError):
    """Point upsert failed."""

    default_code = "UPSERT_ERROR"


class StreamConcatError(ProjectError):
    """Stream chunks could not be merged into a final value."""

    default_code = "STREAM_CONCAT_ERROR"


class SerializationError(ProjectError):
    """A message extra value has no registered type name."""

    default_code = "SERIALIZATION_ERROR"
