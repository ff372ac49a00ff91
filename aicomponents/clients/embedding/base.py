"""Embedding client interface: text -> vector(s)."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Union


class BaseEmbeddingClient(ABC):
    """Embedding provider boundary used by indexers.

    ``embed`` maps an ordered list of texts to an ordered list of vectors,
    one per text. Providers raise EmbeddingError on failure.
    """

    @property
    @abstractmethod
    def provider(self) -> str:
        """Provider name (e.g. openai, gemini)."""
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        ...

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Output vector dimension for this model."""
        ...

    @abstractmethod
    async def embed(
        self,
        text: Union[str, List[str]],
        *,
        model: str | None = None,
    ) -> List[List[float]]:
        """Embed one or more texts. Returns one vector per input text."""
        ...

    async def test_connection(self) -> bool:
        """Check that the client can reach the provider."""
        try:
            await self.embed("test")
            return True
        except Exception:
            return False
