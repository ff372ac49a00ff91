"""Indexer components."""
from aicomponents.components.indexer.base import BaseIndexer, IndexerCallbackInput, IndexerCallbackOutput
from aicomponents.components.indexer.qdrant import INDEXER_TYPE, QdrantIndexer, QdrantIndexerConfig

__all__ = [
    "BaseIndexer",
    "IndexerCallbackInput",
    "IndexerCallbackOutput",
    "QdrantIndexer",
    "QdrantIndexerConfig",
    "INDEXER_TYPE",
]
