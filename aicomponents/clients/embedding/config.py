"""Embedding client configuration."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class EmbeddingConfig:
    """Settings passed to a registry builder to create an embedding client."""

    model: str
    provider: str = "openai"
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    # Requested output size; providers that support truncation honour it
    dimensions: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, omitting None values."""
        return {k: v for k, v in asdict(self).items() if v is not None}
