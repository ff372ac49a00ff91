"""Document: the unit an indexer stores."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict
from uuid import uuid4


@dataclass
class Document:
    """Caller-owned text with metadata. ``id`` is generated when not supplied."""

    content: str = ""
    id: str = field(default_factory=lambda: str(uuid4()))
    metadata: Dict[str, Any] = field(default_factory=dict)
