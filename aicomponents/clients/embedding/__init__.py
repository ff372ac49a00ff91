"""
Embedding clients: base, config, registry.

Build a provider client: default_registry.build(EmbeddingConfig(model=..., provider="openai")).
"""
from aicomponents.clients.embedding.base import BaseEmbeddingClient
from aicomponents.clients.embedding.config import EmbeddingConfig
from aicomponents.clients.embedding.registry import EmbeddingRegistry, default_registry, register_builtin_providers

__all__ = [
    "BaseEmbeddingClient",
    "EmbeddingConfig",
    "EmbeddingRegistry",
    "default_registry",
    "register_builtin_providers",
]
