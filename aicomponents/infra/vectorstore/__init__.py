"""Qdrant vector store access for indexers."""
from aicomponents.infra.vectorstore.client import QdrantManager, to_distance
from aicomponents.infra.vectorstore.collections import (
    PayloadField,
    build_document_payload,
    build_points,
    ensure_collection_exists,
    to_point_id,
)

__all__ = [
    "QdrantManager",
    "to_distance",
    "PayloadField",
    "build_document_payload",
    "build_points",
    "ensure_collection_exists",
    "to_point_id",
]
