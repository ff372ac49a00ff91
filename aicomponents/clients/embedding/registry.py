"""
Embedding provider registry: map provider name -> build client from config dict.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Union

from aicomponents.clients.embedding.base import BaseEmbeddingClient
from aicomponents.clients.embedding.config import EmbeddingConfig
from aicomponents.core.exceptions import ConfigurationError

Builder = Callable[[Dict[str, Any]], BaseEmbeddingClient]


class EmbeddingRegistry:
    """Maps provider id to a builder that takes a config dict and returns BaseEmbeddingClient."""

    def __init__(self) -> None:
        self._builders: Dict[str, Builder] = {}

    def register(self, provider: str, builder: Builder) -> None:
        self._builders[provider] = builder

    def get(self, provider: str) -> Builder | None:
        return self._builders.get(provider)

    @property
    def providers(self) -> list[str]:
        return sorted(self._builders)

    def build(self, config: Union[EmbeddingConfig, Dict[str, Any]]) -> BaseEmbeddingClient:
        """Build a client from an EmbeddingConfig or a plain dict with a ``provider`` key."""
        cfg = config.to_dict() if isinstance(config, EmbeddingConfig) else dict(config)
        provider = cfg.get("provider")
        builder = self._builders.get(provider) if provider else None
        if builder is None:
            raise ConfigurationError(
                f"Unknown embedding provider: {provider!r}. Registered: {self.providers}",
                details={"provider": provider},
            )
        return builder(cfg)


def register_builtin_providers(registry: EmbeddingRegistry) -> EmbeddingRegistry:
    from aicomponents.clients.embedding.providers.gemini import gemini_builder
    from aicomponents.clients.embedding.providers.openai import openai_builder

    registry.register("openai", openai_builder)
    registry.register("gemini", gemini_builder)
    return registry


default_registry = register_builtin_providers(EmbeddingRegistry())
