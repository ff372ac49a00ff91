"""OpenAI Embedding provider: BaseEmbeddingClient implementation + registry builder."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Union

from openai import AsyncOpenAI, OpenAIError

from aicomponents.clients.embedding.base import BaseEmbeddingClient
from aicomponents.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)

_MODEL_DIMENSIONS: Dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddingClient(BaseEmbeddingClient):
    """OpenAI-compatible embedding client (text-embedding-3-small, etc.)."""

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        dimensions: Optional[int] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self._model = model
        self._dimensions = dimensions
        self._dimension = dimensions or _MODEL_DIMENSIONS.get(model, 1536)
        self._client = client or AsyncOpenAI(
            api_key=api_key or os.environ.get("OPENAI_API_KEY"),
            base_url=base_url,
        )

    @property
    def provider(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def dimension(self) -> int:
        return self._dimension

    async def embed(
        self,
        text: Union[str, List[str]],
        *,
        model: Optional[str] = None,
    ) -> List[List[float]]:
        inputs = [text] if isinstance(text, str) else list(text)
        if not inputs:
            return []
        kwargs: Dict[str, Any] = {"model": model or self._model, "input": inputs}
        if self._dimensions is not None:
            kwargs["dimensions"] = self._dimensions
        try:
            response = await self._client.embeddings.create(**kwargs)
        except OpenAIError as exc:
            raise EmbeddingError(
                f"OpenAI embedding request failed: {exc}",
                details={"model": kwargs["model"], "texts": len(inputs)},
                cause=exc,
            ) from exc
        # The API may return items out of order; index is authoritative
        data = sorted(response.data, key=lambda item: item.index)
        logger.debug("openai embed model=%s texts=%d", kwargs["model"], len(inputs))
        return [list(item.embedding) for item in data]


def openai_builder(config: Dict[str, Any]) -> OpenAIEmbeddingClient:
    return OpenAIEmbeddingClient(
        model=config.get("model", "text-embedding-3-small"),
        api_key=config.get("api_key"),
        base_url=config.get("base_url"),
        dimensions=config.get("dimensions"),
    )
