"""
Ark bot values kept in ``Message.extra``.

Each value has one canonical key and, for values that older releases stored
under another name, a deprecated key that readers fall back to.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from aicomponents.compose.stream_concat import StreamConcatRegistry, default_concat_registry
from aicomponents.components.model.arkbot.types import (
    ArkRequestID,
    BotChatResultReference,
    BotChatResultReferences,
    BotCoverImage,
    BotUsage,
)
from aicomponents.schema import Message
from aicomponents.schema.serialization import TypeNameRegistry, default_name_registry

KEY_BOT_REQUEST_ID = "ark-bot-request-id"
KEY_BOT_REASONING_CONTENT = "ark-bot-reasoning-content"
KEY_BOT_USAGE = "ark-bot-usage"
KEY_BOT_REFERENCES = "ark-bot-references"

# Deprecated: written by older releases, read as a fallback only
KEY_REQUEST_ID = "ark-request-id"
KEY_REASONING_CONTENT = "ark-reasoning-content"
KEY_REFERENCES = "ark-references"

T = TypeVar("T")


@dataclass(frozen=True)
class ExtraField(Generic[T]):
    """One extra value: candidate keys in lookup order (canonical first) and its type."""

    keys: Tuple[str, ...]
    value_type: Type[Any]

    @property
    def key(self) -> str:
        return self.keys[0]

    def get(self, msg: Optional[Message]) -> Tuple[Optional[T], bool]:
        if msg is None or not msg.extra:
            return None, False
        for key in self.keys:
            value = msg.extra.get(key)
            if isinstance(value, self.value_type):
                return value, True
        return None, False

    def set(self, msg: Optional[Message], value: T) -> None:
        if msg is None:
            return
        if msg.extra is None:
            msg.extra = {}
        msg.extra[self.key] = value


REQUEST_ID: ExtraField[str] = ExtraField((KEY_BOT_REQUEST_ID, KEY_REQUEST_ID), str)
REASONING_CONTENT: ExtraField[str] = ExtraField((KEY_BOT_REASONING_CONTENT, KEY_REASONING_CONTENT), str)
USAGE: ExtraField[BotUsage] = ExtraField((KEY_BOT_USAGE,), BotUsage)
REFERENCES: ExtraField[List[BotChatResultReference]] = ExtraField((KEY_BOT_REFERENCES, KEY_REFERENCES), list)


def set_ark_request_id(msg: Optional[Message], request_id: str) -> None:
    REQUEST_ID.set(msg, ArkRequestID(request_id))


def get_ark_request_id(msg: Optional[Message]) -> str:
    """Request id of the bot call that produced ``msg``, or "" when unknown."""
    value, _ = REQUEST_ID.get(msg)
    return str(value) if value is not None else ""


def set_reasoning_content(msg: Optional[Message], content: str) -> None:
    REASONING_CONTENT.set(msg, content)


def get_reasoning_content(msg: Optional[Message]) -> Tuple[str, bool]:
    value, ok = REASONING_CONTENT.get(msg)
    return (str(value), True) if ok else ("", False)


def set_bot_usage(msg: Optional[Message], usage: BotUsage) -> None:
    USAGE.set(msg, usage)


def get_bot_usage(msg: Optional[Message]) -> Tuple[Optional[BotUsage], bool]:
    return USAGE.get(msg)


def set_bot_chat_result_reference(msg: Optional[Message], references: Optional[Sequence[BotChatResultReference]]) -> None:
    REFERENCES.set(msg, BotChatResultReferences(references or ()))


def get_bot_chat_result_reference(msg: Optional[Message]) -> Tuple[Optional[List[BotChatResultReference]], bool]:
    return REFERENCES.get(msg)


def concat_request_ids(chunks: Sequence[Optional[ArkRequestID]]) -> ArkRequestID:
    """Later chunks supersede earlier ones; empty ids never replace a known one."""
    for chunk in reversed(chunks):
        if chunk:
            return ArkRequestID(chunk)
    return ArkRequestID("")


def concat_bot_usages(chunks: Sequence[Optional[BotUsage]]) -> BotUsage:
    merged = BotUsage()
    for chunk in chunks:
        if chunk is None:
            continue
        merged.model_usage.extend(chunk.model_usage or [])
        merged.action_usage.extend(chunk.action_usage or [])
    return merged


def concat_references(chunks: Sequence[Optional[Sequence[BotChatResultReference]]]) -> BotChatResultReferences:
    merged = BotChatResultReferences()
    for chunk in chunks:
        if chunk:
            merged.extend(chunk)
    return merged


def concat_reference_lists(chunks: Sequence[Optional[Sequence[Any]]]) -> List[Any]:
    """Flatten plain-list chunks, as written by older producers or by hand.

    The result is a BotChatResultReferences when every item is a reference,
    otherwise a plain list.
    """
    merged = concat_references(chunks)
    if all(isinstance(item, BotChatResultReference) for item in merged):
        return merged
    return list(merged)


def register_extra_types(
    concat_registry: Optional[StreamConcatRegistry] = None,
    name_registry: Optional[TypeNameRegistry] = None,
) -> None:
    """Register the Ark bot extra types for stream reassembly and serialization.

    Idempotent. Called by ArkBotChatModel; call it directly when only reading
    or deserializing messages produced elsewhere.
    """
    concat = concat_registry or default_concat_registry
    names = name_registry or default_name_registry

    concat.register(ArkRequestID, concat_request_ids)
    concat.register(BotUsage, concat_bot_usages)
    concat.register(BotChatResultReferences, concat_references)
    concat.register(list, concat_reference_lists)

    names.register("_aicomponents_ark_bot_request_id", ArkRequestID)
    names.register("_aicomponents_ark_bot_usage", BotUsage)
    names.register("_aicomponents_ark_bot_chat_result_reference", BotChatResultReferences, item_type=BotChatResultReference)
    names.register("_aicomponents_ark_bot_cover_image", BotCoverImage)
