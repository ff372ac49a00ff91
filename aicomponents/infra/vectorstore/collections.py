"""Payload layout, point ids and lazy collection setup for document indexing."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Union
from uuid import NAMESPACE_URL, UUID, uuid5

from qdrant_client.models import PointStruct

if TYPE_CHECKING:
    from aicomponents.infra.vectorstore.client import QdrantManager

logger = logging.getLogger(__name__)

# Stable namespace for ids that are not UUIDs themselves
POINT_ID_NAMESPACE = uuid5(NAMESPACE_URL, "aicomponents/qdrant/document")


# Qdrant point ids are unsigned 64-bit ints
MAX_INT_POINT_ID = 2**64


class PayloadField:
    CONTENT = "content"
    METADATA = "metadata"
    DOCUMENT_ID = "document_id"


def to_point_id(document_id: str) -> Union[str, int]:
    """Map a document id to a Qdrant point id.

    Only ids that already are a canonical point id keep their value: a
    lowercase hyphenated UUID, or a decimal below 2**64 without leading
    zeros. Everything else maps to a uuid5, so distinct document ids never
    share a point.
    """
    try:
        if str(UUID(document_id)) == document_id:
            return document_id
    except (ValueError, AttributeError, TypeError):
        pass
    if document_id.isascii() and document_id.isdecimal():
        number = int(document_id)
        if str(number) == document_id and number < MAX_INT_POINT_ID:
            return number
    return str(uuid5(POINT_ID_NAMESPACE, document_id))


def build_document_payload(document_id: str, content: str, metadata: Dict[str, Any] | None) -> Dict[str, Any]:
    return {
        PayloadField.CONTENT: content,
        PayloadField.METADATA: dict(metadata or {}),
        PayloadField.DOCUMENT_ID: document_id,
    }


def build_points(ids: List[str], contents: List[str], metadatas: List[Dict[str, Any]], vectors: List[List[float]]) -> List[PointStruct]:
    return [
        PointStruct(
            id=to_point_id(doc_id),
            vector=[float(x) for x in vector],
            payload=build_document_payload(doc_id, content, metadata),
        )
        for doc_id, content, metadata, vector in zip(ids, contents, metadatas, vectors)
    ]


async def ensure_collection_exists(
    manager: "QdrantManager",
    name: str,
    *,
    vector_size: int,
    distance: str = "Cosine",
) -> bool:
    """Create ``name`` when absent. Returns True if this call created it.

    Check-then-create is not atomic; a concurrent creator surfaces as a 409
    which QdrantManager reports as "not created".
    """
    if await manager.collection_exists(name):
        logger.debug("Collection '%s' already exists.", name)
        return False
    logger.info("Creating collection '%s' vector_size=%d distance=%s", name, vector_size, distance)
    return await manager.create_collection(name, vector_size=vector_size, distance=distance)
