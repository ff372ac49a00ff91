"""
aicomponents.config.qdrant – Qdrant connection and collection config.

Env vars: QDRANT_URL, QDRANT_API_KEY, QDRANT_TIMEOUT, QDRANT_VECTOR_SIZE,
         QDRANT_COLLECTION_NAME, QDRANT_DISTANCE, QDRANT_BATCH_SIZE.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

VALID_DISTANCES = frozenset({"Cosine", "Dot", "Euclid", "Manhattan"})
DEFAULT_COLLECTION = "knowledge_base"
DEFAULT_BATCH_SIZE = 10


@dataclass(frozen=True)
class QdrantConfig:
    url: str
    api_key: str | None = None
    timeout: int = 30
    vector_size: int = 1536
    collection_name: str = DEFAULT_COLLECTION
    distance: str = "Cosine"
    batch_size: int = DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        url = (self.url or "").strip()
        if not url or not (url.startswith("http://") or url.startswith("https://")):
            raise ValueError("QDRANT_URL must start with http:// or https://")
        if not isinstance(self.timeout, int) or self.timeout < 1:
            raise ValueError(f"timeout must be a positive integer, got {self.timeout!r}")
        if not isinstance(self.vector_size, int) or self.vector_size < 1:
            raise ValueError(f"vector_size must be a positive integer, got {self.vector_size!r}")
        if not isinstance(self.batch_size, int) or self.batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {self.batch_size!r}")
        if self.distance not in VALID_DISTANCES:
            raise ValueError(f"distance must be one of {sorted(VALID_DISTANCES)}, got {self.distance!r}")
        if not self.collection_name or not self.collection_name.strip():
            raise ValueError("collection_name must be a non-empty string")

    @classmethod
    def from_env(cls, **overrides: object) -> QdrantConfig:
        url = str(overrides.get("url") or os.environ.get("QDRANT_URL", "http://localhost:6333")).strip().rstrip("/")
        raw_key = overrides.get("api_key") or os.environ.get("QDRANT_API_KEY")
        api_key = str(raw_key).strip() if raw_key else None
        if api_key == "":
            api_key = None
        timeout = int(overrides.get("timeout") or os.environ.get("QDRANT_TIMEOUT", "30"))
        vector_size = int(overrides.get("vector_size") or os.environ.get("QDRANT_VECTOR_SIZE", "1536"))
        collection_name = str(overrides.get("collection_name") or os.environ.get("QDRANT_COLLECTION_NAME", DEFAULT_COLLECTION)).strip()
        distance = str(overrides.get("distance") or os.environ.get("QDRANT_DISTANCE", "Cosine")).strip()
        batch_size = int(overrides.get("batch_size") or os.environ.get("QDRANT_BATCH_SIZE", str(DEFAULT_BATCH_SIZE)))
        return cls(
            url=url,
            api_key=api_key,
            timeout=timeout,
            vector_size=vector_size,
            collection_name=collection_name,
            distance=distance,
            batch_size=batch_size,
        )


def load_qdrant_config(**overrides: object) -> QdrantConfig:
    return QdrantConfig.from_env(**overrides)
