"""Google Gemini Embedding provider: BaseEmbeddingClient implementation + registry builder."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Union

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from aicomponents.clients.embedding.base import BaseEmbeddingClient
from aicomponents.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)

_MODEL_DIMENSIONS: Dict[str, int] = {
    "text-embedding-004": 768,
    "text-embedding-005": 768,
    "gemini-embedding-001": 3072,
}


class GeminiEmbeddingClient(BaseEmbeddingClient):
    """Google Gemini embedding client (text-embedding-004, etc.)."""

    def __init__(
        self,
        model: str = "text-embedding-004",
        *,
        api_key: Optional[str] = None,
        dimensions: Optional[int] = None,
        client: Optional[genai.Client] = None,
    ) -> None:
        self._model = model
        self._dimensions = dimensions
        self._dimension = dimensions or _MODEL_DIMENSIONS.get(model, 768)
        if client is None:
            resolved_key = api_key or os.environ.get("GEMINI_API_KEY") or os.environ.get("GOOGLE_API_KEY")
            client = genai.Client(api_key=resolved_key)
        self._client = client

    @property
    def provider(self) -> str:
        return "gemini"

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
        config = None
        if self._dimensions is not None:
            config = genai_types.EmbedContentConfig(output_dimensionality=self._dimensions)
        try:
            response = await self._client.aio.models.embed_content(
                model=model or self._model,
                contents=inputs,
                config=config,
            )
        except genai_errors.APIError as exc:
            raise EmbeddingError(
                f"Gemini embedding request failed: {exc}",
                details={"model": model or self._model, "texts": len(inputs)},
                cause=exc,
            ) from exc
        embeddings = response.embeddings or []
        return [list(item.values or []) for item in embeddings]


def gemini_builder(config: Dict[str, Any]) -> GeminiEmbeddingClient:
    return GeminiEmbeddingClient(
        model=config.get("model", "text-embedding-004"),
        api_key=config.get("api_key"),
        dimensions=config.get("dimensions"),
    )
