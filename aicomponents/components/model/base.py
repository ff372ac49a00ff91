"""Chat model interface shared by vendor adapters."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator, Sequence

from aicomponents.schema import Message


class BaseChatModel(ABC):
    @property
    @abstractmethod
    def provider(self) -> str:
        ...

    @abstractmethod
    async def generate(self, messages: Sequence[Message]) -> Message:
        """Return the full assistant message for ``messages``."""
        ...

    @abstractmethod
    def stream(self, messages: Sequence[Message]) -> AsyncIterator[Message]:
        """Yield assistant message chunks; merge them with ``concat_messages``."""
        ...
