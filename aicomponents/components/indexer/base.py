"""Indexer interface and callback payloads."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from aicomponents.callbacks import CallbackHandler
    from aicomponents.clients.embedding import BaseEmbeddingClient
    from aicomponents.schema import Document

COMPONENT_INDEXER = "Indexer"


@dataclass
class IndexerCallbackInput:
    docs: List["Document"] = field(default_factory=list)


@dataclass
class IndexerCallbackOutput:
    ids: List[str] = field(default_factory=list)


class BaseIndexer(ABC):
    """Stores documents and returns their ids in input order."""

    @abstractmethod
    async def store(
        self,
        docs: Sequence["Document"],
        *,
        embedding: Optional["BaseEmbeddingClient"] = None,
        callbacks: Optional[Sequence["CallbackHandler"]] = None,
    ) -> List[str]:
        ...

    @abstractmethod
    def get_type(self) -> str:
        ...

    def is_callbacks_enabled(self) -> bool:
        return False
