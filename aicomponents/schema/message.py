"""Chat message with an ``extra`` side-channel, and stream reassembly."""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from aicomponents.compose.stream_concat import StreamConcatRegistry, default_concat_registry
from aicomponents.core.exceptions import StreamConcatError
from aicomponents.schema.serialization import TypeNameRegistry, default_name_registry

ROLES = ("system", "user", "assistant", "tool")


@dataclass
class Message:
    role: str
    content: str = ""
    name: Optional[str] = None
    # Allocated on first write; component-specific values keyed by namespaced strings
    extra: Optional[Dict[str, Any]] = None

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role="assistant", content=content)

    def to_chat_dict(self) -> Dict[str, Any]:
        """Payload for OpenAI-compatible chat APIs (extra is never sent)."""
        out: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name:
            out["name"] = self.name
        return out

    def to_dict(self, registry: Optional[TypeNameRegistry] = None) -> Dict[str, Any]:
        reg = registry or default_name_registry
        out: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            out["name"] = self.name
        if self.extra:
            out["extra"] = reg.encode(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any], registry: Optional[TypeNameRegistry] = None) -> "Message":
        reg = registry or default_name_registry
        extra = data.get("extra")
        return cls(
            role=data["role"],
            content=data.get("content") or "",
            name=data.get("name"),
            extra=reg.decode(extra) if extra else None,
        )


def concat_messages(
    chunks: Sequence[Message],
    registry: Optional[StreamConcatRegistry] = None,
) -> Message:
    """Merge streamed message chunks, in order, into one message.

    Content is joined; role and name must agree across chunks that set them;
    each extra key is reduced through the stream concat registry.
    """
    if not chunks:
        raise StreamConcatError("Cannot concat an empty list of messages")
    reg = registry or default_concat_registry

    role = ""
    name: Optional[str] = None
    parts: List[str] = []
    extras: "OrderedDict[str, List[Any]]" = OrderedDict()
    for idx, chunk in enumerate(chunks):
        if chunk is None:
            raise StreamConcatError(f"Message chunk at position {idx} is None")
        if chunk.role:
            if role and chunk.role != role:
                raise StreamConcatError(f"Cannot concat messages with different roles: {role!r} and {chunk.role!r}")
            role = chunk.role
        if chunk.name:
            if name and chunk.name != name:
                raise StreamConcatError(f"Cannot concat messages with different names: {name!r} and {chunk.name!r}")
            name = chunk.name
        parts.append(chunk.content or "")
        for key, value in (chunk.extra or {}).items():
            extras.setdefault(key, []).append(value)

    merged_extra: Optional[Dict[str, Any]] = None
    if extras:
        merged_extra = {key: reg.concat(values) for key, values in extras.items()}
    return Message(role=role, content="".join(parts), name=name, extra=merged_extra)
