"""Embedding provider implementations."""
from aicomponents.clients.embedding.providers.gemini import GeminiEmbeddingClient, gemini_builder
from aicomponents.clients.embedding.providers.openai import OpenAIEmbeddingClient, openai_builder

__all__ = ["OpenAIEmbeddingClient", "openai_builder", "GeminiEmbeddingClient", "gemini_builder"]
