"""Qdrant indexer: embed documents in batches and upsert them as points."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Sequence

from aicomponents.callbacks import RunInfo, run_on_end, run_on_error, run_on_start
from aicomponents.components.indexer.base import (
    COMPONENT_INDEXER,
    BaseIndexer,
    IndexerCallbackInput,
    IndexerCallbackOutput,
)
from aicomponents.config.qdrant import DEFAULT_BATCH_SIZE, DEFAULT_COLLECTION, VALID_DISTANCES
from aicomponents.core.exceptions import ConfigurationError, DimensionMismatchError, EmbeddingError
from aicomponents.infra.vectorstore.collections import build_points, ensure_collection_exists

if TYPE_CHECKING:
    from aicomponents.callbacks import CallbackHandler
    from aicomponents.clients.embedding import BaseEmbeddingClient
    from aicomponents.config import QdrantConfig
    from aicomponents.infra.vectorstore import QdrantManager
    from aicomponents.schema import Document

logger = logging.getLogger(__name__)

INDEXER_TYPE = "Qdrant"


@dataclass
class QdrantIndexerConfig:
    client: Optional["QdrantManager"]
    embedding: Optional["BaseEmbeddingClient"]
    vector_dim: int
    collection: str = DEFAULT_COLLECTION
    distance: str = "Cosine"
    # Number of texts per embedding call and points per upsert
    batch_size: int = DEFAULT_BATCH_SIZE

    @classmethod
    def from_qdrant_config(
        cls,
        config: "QdrantConfig",
        *,
        client: "QdrantManager",
        embedding: "BaseEmbeddingClient",
    ) -> "QdrantIndexerConfig":
        return cls(
            client=client,
            embedding=embedding,
            vector_dim=config.vector_size,
            collection=config.collection_name,
            distance=config.distance,
            batch_size=config.batch_size,
        )


class QdrantIndexer(BaseIndexer):
    """Stores documents into one Qdrant collection.

    The collection is created on the first ``store`` call if it does not exist,
    with the configured vector size and distance. Each batch is embedded with
    one provider call and written with one upsert; the first failing batch
    aborts the call and later batches are not attempted.
    """

    def __init__(self, config: QdrantIndexerConfig, *, name: str = "") -> None:
        if config.client is None:
            raise ConfigurationError("qdrant client not provided")
        if config.embedding is None:
            raise ConfigurationError("embedding not provided for qdrant indexer")
        vector_dim = config.vector_dim
        if isinstance(vector_dim, bool) or not isinstance(vector_dim, int) or vector_dim < 1:
            raise ConfigurationError(
                f"vector_dim must be a positive integer, got {vector_dim!r}",
                details={"vector_dim": vector_dim},
            )
        if not isinstance(config.distance, str) or config.distance.capitalize() not in VALID_DISTANCES:
            raise ConfigurationError(
                f"distance must be one of {sorted(VALID_DISTANCES)}, got {config.distance!r}",
                details={"distance": config.distance},
            )
        batch_size = config.batch_size or DEFAULT_BATCH_SIZE
        if batch_size < 1:
            raise ConfigurationError(f"batch_size must be positive, got {batch_size!r}")

        self._client = config.client
        self._embedding = config.embedding
        self._vector_dim = config.vector_dim
        self._collection = config.collection or DEFAULT_COLLECTION
        self._distance = config.distance.capitalize()
        self._batch_size = batch_size
        self._collection_ready = False
        self._run_info = RunInfo(name=name or f"{INDEXER_TYPE}{COMPONENT_INDEXER}", type=INDEXER_TYPE, component=COMPONENT_INDEXER)

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def get_type(self) -> str:
        return INDEXER_TYPE

    def is_callbacks_enabled(self) -> bool:
        return True

    async def store(
        self,
        docs: Sequence["Document"],
        *,
        embedding: Optional["BaseEmbeddingClient"] = None,
        callbacks: Optional[Sequence["CallbackHandler"]] = None,
    ) -> List[str]:
        """Embed and upsert ``docs``; return their ids in input order."""
        docs = list(docs)
        await run_on_start(callbacks, self._run_info, IndexerCallbackInput(docs=docs))
        try:
            await self._batch_upsert(docs, embedding or self._embedding)
        except Exception as exc:
            await run_on_error(callbacks, self._run_info, exc)
            raise
        ids = [doc.id for doc in docs]
        await run_on_end(callbacks, self._run_info, IndexerCallbackOutput(ids=ids))
        return ids

    async def _batch_upsert(self, docs: List["Document"], embedding: "BaseEmbeddingClient") -> None:
        total = len(docs)
        for start in range(0, total, self._batch_size):
            batch = docs[start : start + self._batch_size]
            vectors = await self._embed_batch(embedding, [doc.content for doc in batch], offset=start)
            await self._ensure_collection()
            points = build_points(
                [doc.id for doc in batch],
                [doc.content for doc in batch],
                [doc.metadata for doc in batch],
                vectors,
            )
            await self._client.upsert_points(self._collection, points)
            logger.debug(
                "Upserted batch collection=%s docs=%d-%d of %d",
                self._collection, start + 1, start + len(batch), total,
            )

    async def _embed_batch(self, embedding: "BaseEmbeddingClient", texts: List[str], *, offset: int) -> List[List[float]]:
        try:
            vectors = await embedding.embed(texts)
        except EmbeddingError:
            raise
        except Exception as exc:
            raise EmbeddingError(
                f"embedding failed: {exc}",
                details={"collection": self._collection, "batch_offset": offset},
                cause=exc,
            ) from exc
        if len(vectors) != len(texts):
            raise EmbeddingError(
                f"invalid vector count, expected={len(texts)}, got={len(vectors)}",
                details={"expected": len(texts), "got": len(vectors), "batch_offset": offset},
            )
        for idx, vector in enumerate(vectors):
            if len(vector) != self._vector_dim:
                raise DimensionMismatchError(self._vector_dim, len(vector), index=offset + idx)
        return vectors

    async def _ensure_collection(self) -> None:
        if self._collection_ready:
            return
        await ensure_collection_exists(
            self._client,
            self._collection,
            vector_size=self._vector_dim,
            distance=self._distance,
        )
        self._collection_ready = True
