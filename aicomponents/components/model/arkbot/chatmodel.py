"""Ark bot chat model over the OpenAI-compatible bots endpoint."""
from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from openai import AsyncOpenAI, OpenAIError

from aicomponents.compose.stream_concat import StreamConcatRegistry
from aicomponents.components.model.arkbot.message_extra import (
    register_extra_types,
    set_ark_request_id,
    set_bot_chat_result_reference,
    set_bot_usage,
    set_reasoning_content,
)
from aicomponents.components.model.arkbot.types import BotChatResultReference, BotUsage
from aicomponents.components.model.base import BaseChatModel
from aicomponents.config.arkbot import ArkBotConfig
from aicomponents.core.exceptions import ConfigurationError, ExternalServiceError
from aicomponents.schema import Message
from aicomponents.schema.serialization import TypeNameRegistry

logger = logging.getLogger(__name__)


class ArkBotChatModel(BaseChatModel):
    """Chat with an Ark bot; vendor metadata lands in the message extras.

    ``generate`` and every ``stream`` chunk carry the request id, and, when
    the API returns them, reasoning content, bot usage and references.
    """

    def __init__(
        self,
        config: ArkBotConfig,
        *,
        client: Optional[AsyncOpenAI] = None,
        concat_registry: Optional[StreamConcatRegistry] = None,
        name_registry: Optional[TypeNameRegistry] = None,
    ) -> None:
        if client is None and not config.api_key:
            raise ConfigurationError("ARK_API_KEY is required for the Ark bot chat model")
        self._config = config
        self._client = client or AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
        )
        register_extra_types(concat_registry, name_registry)

    @property
    def provider(self) -> str:
        return "arkbot"

    @property
    def bot_id(self) -> str:
        return self._config.bot_id

    async def generate(self, messages: Sequence[Message]) -> Message:
        kwargs = self._request_kwargs(messages)
        try:
            response = await self._client.chat.completions.create(**kwargs)
        except OpenAIError as exc:
            raise ExternalServiceError(
                f"Ark bot request failed: {exc}", details={"bot_id": self.bot_id}, cause=exc
            ) from exc
        if not response.choices:
            raise ExternalServiceError("Ark bot returned no choices", details={"bot_id": self.bot_id})

        reply = response.choices[0].message
        msg = Message(role="assistant", content=reply.content or "")
        _apply_extras(msg, response, reply)
        logger.debug("arkbot generate bot=%s chars=%d", self.bot_id, len(msg.content))
        return msg

    async def stream(self, messages: Sequence[Message]) -> AsyncIterator[Message]:
        kwargs = self._request_kwargs(messages)
        kwargs["stream"] = True
        kwargs["stream_options"] = {"include_usage": True}
        try:
            chunks = await self._client.chat.completions.create(**kwargs)
            async for chunk in chunks:
                delta = chunk.choices[0].delta if chunk.choices else None
                msg = Message(role="assistant", content=(getattr(delta, "content", None) or ""))
                _apply_extras(msg, chunk, delta)
                yield msg
        except OpenAIError as exc:
            raise ExternalServiceError(
                f"Ark bot stream failed: {exc}", details={"bot_id": self.bot_id}, cause=exc
            ) from exc

    def _request_kwargs(self, messages: Sequence[Message]) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "model": self._config.bot_id,
            "messages": [m.to_chat_dict() for m in messages],
        }
        if self._config.temperature is not None:
            kwargs["temperature"] = self._config.temperature
        if self._config.max_tokens is not None:
            kwargs["max_tokens"] = self._config.max_tokens
        return kwargs


def _as_dict(value: Any) -> Any:
    # SDK objects keep unknown response fields either as dicts or as models
    if hasattr(value, "model_dump"):
        return value.model_dump()
    return value


def _apply_extras(msg: Message, response: Any, reply: Any) -> None:
    request_id = getattr(response, "_request_id", None) or getattr(response, "id", None)
    if request_id:
        set_ark_request_id(msg, request_id)

    reasoning = getattr(reply, "reasoning_content", None) if reply is not None else None
    if reasoning:
        set_reasoning_content(msg, reasoning)

    usage = getattr(response, "bot_usage", None)
    if usage:
        set_bot_usage(msg, BotUsage.model_validate(_as_dict(usage)))

    references = getattr(response, "references", None)
    if references:
        refs: List[BotChatResultReference] = [
            BotChatResultReference.model_validate(_as_dict(ref)) for ref in references
        ]
        set_bot_chat_result_reference(msg, refs)
