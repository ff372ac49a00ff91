"""
Project exception system.

Usage:
    from aicomponents.core.exceptions import ProjectError, EmbeddingError, exception_factory

    # Built-in types
    raise EmbeddingError("Provider returned 2 vectors for 3 texts", details={"collection": "kb"})

    # Add new type on demand
    RetrieverError = exception_factory("RetrieverError", code="RETRIEVER_ERROR")
    raise RetrieverError("Search failed", cause=original_error)
"""
from aicomponents.core.exceptions.base import ProjectError, exception_factory
from aicomponents.core.exceptions.errors import (
    CollectionError,
    ConfigurationError,
    DimensionMismatchError,
    EmbeddingError,
    ExternalServiceError,
    SerializationError,
    StreamConcatError,
    UpsertError,
    VectorstoreError,
)

__all__ = [
    "ProjectError",
    "exception_factory",
    "ConfigurationError",
    "ExternalServiceError",
    "EmbeddingError",
    "DimensionMismatchError",
    "VectorstoreError",
    "CollectionError",
    "UpsertError",
    "StreamConcatError",
    "SerializationError",
]
