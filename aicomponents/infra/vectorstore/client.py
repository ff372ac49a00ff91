"""Async Qdrant client wrapper exposing the operations indexers consume."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from qdrant_client import AsyncQdrantClient
from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse
from qdrant_client.models import Distance, PointStruct, UpdateResult, VectorParams

from aicomponents.core.exceptions import CollectionError, ConfigurationError, UpsertError, VectorstoreError

if TYPE_CHECKING:
    from aicomponents.config import QdrantConfig

logger = logging.getLogger(__name__)

_CLIENT_ERRORS = (UnexpectedResponse, ResponseHandlingException)


def to_distance(name: str) -> Distance:
    """Map "Cosine" / "Dot" / "Euclid" / "Manhattan" (any case) to the Qdrant enum."""
    try:
        return Distance[name.upper()]
    except KeyError:
        raise ConfigurationError(
            f"Invalid distance '{name}'. Use Cosine, Dot, Euclid or Manhattan.",
            details={"distance": name},
        ) from None


class QdrantManager:
    """Async Qdrant wrapper. Failures surface as VectorstoreError subclasses; nothing is retried here."""

    def __init__(
        self,
        config: Optional["QdrantConfig"] = None,
        *,
        client: Optional[AsyncQdrantClient] = None,
    ) -> None:
        if client is not None:
            self._client = client
            self._url = getattr(config, "url", None)
        else:
            if config is None:
                from aicomponents.config import load_qdrant_config
                config = load_qdrant_config()
            self._url = config.url
            self._client = AsyncQdrantClient(url=config.url, api_key=config.api_key, timeout=config.timeout)
        logger.info("QdrantManager initialised url=%s", self._url)

    @property
    def client(self) -> AsyncQdrantClient:
        return self._client

    async def collection_exists(self, name: str) -> bool:
        try:
            return await self._client.collection_exists(name)
        except _CLIENT_ERRORS as exc:
            raise CollectionError(f"Failed to check collection '{name}': {exc}", details={"collection": name}, cause=exc) from exc

    async def create_collection(self, name: str, vector_size: int, distance: str = "Cosine") -> bool:
        """Create the collection. Returns False when another creator won the race (HTTP 409)."""
        dist = to_distance(distance)
        try:
            await self._client.create_collection(
                collection_name=name,
                vectors_config=VectorParams(size=vector_size, distance=dist),
            )
        except UnexpectedResponse as exc:
            if exc.status_code == 409:
                logger.debug("Collection '%s' already exists.", name)
                return False
            raise CollectionError(f"Failed to create collection '{name}': {exc}", details={"collection": name}, cause=exc) from exc
        except ResponseHandlingException as exc:
            raise CollectionError(f"Failed to create collection '{name}': {exc}", details={"collection": name}, cause=exc) from exc
        logger.info("Created collection name=%s vector_size=%d distance=%s", name, vector_size, dist.value)
        return True

    async def upsert_points(self, collection: str, points: List[PointStruct], wait: bool = True) -> UpdateResult:
        if not points:
            return UpdateResult(operation_id=None, status="completed")  # type: ignore[call-arg]
        try:
            result = await self._client.upsert(collection_name=collection, points=points, wait=wait)
        except _CLIENT_ERRORS as exc:
            raise UpsertError(
                f"Failed to upsert {len(points)} points into '{collection}': {exc}",
                details={"collection": collection, "points": len(points)},
                cause=exc,
            ) from exc
        logger.debug("upsert_points collection=%s count=%d", collection, len(points))
        return result

    async def count_points(self, collection: str, exact: bool = True) -> int:
        try:
            result = await self._client.count(collection_name=collection, exact=exact)
        except _CLIENT_ERRORS as exc:
            raise VectorstoreError(f"Failed to count points in '{collection}': {exc}", details={"collection": collection}, cause=exc) from exc
        return result.count

    async def close(self) -> None:
        await self._client.close()
        logger.debug("QdrantManager: client closed.")
