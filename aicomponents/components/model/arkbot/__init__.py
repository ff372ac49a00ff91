"""
Ark bot chat model and its message extras.

    from aicomponents.components.model.arkbot import ArkBotChatModel, get_bot_usage
    from aicomponents.schema import concat_messages

    model = ArkBotChatModel(load_arkbot_config())
    chunks = [chunk async for chunk in model.stream([Message.user("hi")])]
    final = concat_messages(chunks)
    usage, ok = get_bot_usage(final)
"""
from aicomponents.components.model.arkbot.chatmodel import ArkBotChatModel
from aicomponents.components.model.arkbot.message_extra import (
    concat_bot_usages,
    concat_reference_lists,
    concat_references,
    concat_request_ids,
    get_ark_request_id,
    get_bot_chat_result_reference,
    get_bot_usage,
    get_reasoning_content,
    register_extra_types,
)
from aicomponents.components.model.arkbot.types import (
    ArkRequestID,
    BotActionUsage,
    BotChatResultReference,
    BotChatResultReferences,
    BotCoverImage,
    BotModelUsage,
    BotUsage,
)

__all__ = [
    "ArkBotChatModel",
    "get_ark_request_id",
    "get_reasoning_content",
    "get_bot_usage",
    "get_bot_chat_result_reference",
    "concat_request_ids",
    "concat_bot_usages",
    "concat_references",
    "concat_reference_lists",
    "register_extra_types",
    "ArkRequestID",
    "BotUsage",
    "BotModelUsage",
    "BotActionUsage",
    "BotChatResultReference",
    "BotChatResultReferences",
    "BotCoverImage",
]
