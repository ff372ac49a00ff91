"""Tests for ArkBotChatModel: extras on generate and on streamed chunks."""
from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from openai import OpenAIError

from aicomponents.compose import StreamConcatRegistry
from aicomponents.components.model.arkbot import (
    ArkBotChatModel,
    get_ark_request_id,
    get_bot_chat_result_reference,
    get_bot_usage,
    get_reasoning_content,
)
from aicomponents.config import ArkBotConfig
from aicomponents.core.exceptions import ConfigurationError, ExternalServiceError
from aicomponents.schema import Message, TypeNameRegistry, concat_messages

from aicomponents.tests.fakes import _run

_USAGE = {
    "model_usage": [{"name": "doubao-pro", "prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15}],
    "action_usage": [{"name": "web_search", "count": 1}],
}
_REFERENCES = [{"url": "https://example.com", "title": "Example", "cover_image": {"url": "https://img", "width": 10, "height": 20}}]


class _Stream:
    def __init__(self, chunks) -> None:
        self._chunks = chunks

    def __aiter__(self):
        return self._gen()

    async def _gen(self):
        for chunk in self._chunks:
            yield chunk


def _chunk(content=None, reasoning=None, **extra):
    delta = SimpleNamespace(content=content, reasoning_content=reasoning)
    return SimpleNamespace(id="chatcmpl-1", choices=[SimpleNamespace(delta=delta)], **extra)


class TestArkBotChatModel(unittest.TestCase):
    def setUp(self) -> None:
        self.client = MagicMock()
        self.client.chat.completions.create = AsyncMock()
        self.concat = StreamConcatRegistry()
        self.names = TypeNameRegistry()
        self.model = ArkBotChatModel(
            ArkBotConfig(bot_id="bot-20250101", temperature=0.2),
            client=self.client,
            concat_registry=self.concat,
            name_registry=self.names,
        )

    def test_requires_api_key_without_client(self) -> None:
        with self.assertRaises(ConfigurationError):
            ArkBotChatModel(ArkBotConfig(bot_id="b"))

    def test_generate_sets_extras(self) -> None:
        self.client.chat.completions.create.return_value = SimpleNamespace(
            id="chatcmpl-1",
            _request_id="req-abc",
            choices=[SimpleNamespace(message=SimpleNamespace(content="Paris.", reasoning_content="capital of France"))],
            bot_usage=_USAGE,
            references=_REFERENCES,
        )

        msg = _run(self.model.generate([Message.system("be brief"), Message.user("capital?")]))

        self.assertEqual(msg.role, "assistant")
        self.assertEqual(msg.content, "Paris.")
        self.assertEqual(get_ark_request_id(msg), "req-abc")
        self.assertEqual(get_reasoning_content(msg), ("capital of France", True))
        usage, ok = get_bot_usage(msg)
        self.assertTrue(ok)
        self.assertEqual(usage.model_usage[0].total_tokens, 15)
        self.assertEqual(usage.action_usage[0].name, "web_search")
        refs, ok = get_bot_chat_result_reference(msg)
        self.assertTrue(ok)
        self.assertEqual(refs[0].cover_image.height, 20)

        kwargs = self.client.chat.completions.create.await_args.kwargs
        self.assertEqual(kwargs["model"], "bot-20250101")
        self.assertEqual(kwargs["temperature"], 0.2)
        self.assertEqual(kwargs["messages"][0], {"role": "system", "content": "be brief"})

    def test_generate_without_optional_extras(self) -> None:
        self.client.chat.completions.create.return_value = SimpleNamespace(
            id="chatcmpl-2",
            choices=[SimpleNamespace(message=SimpleNamespace(content="ok"))],
        )
        msg = _run(self.model.generate([Message.user("hi")]))
        self.assertEqual(get_ark_request_id(msg), "chatcmpl-2")
        self.assertEqual(get_bot_usage(msg), (None, False))
        self.assertEqual(get_reasoning_content(msg), ("", False))

    def test_generate_error_wrapped(self) -> None:
        self.client.chat.completions.create.side_effect = OpenAIError("401")
        with self.assertRaises(ExternalServiceError):
            _run(self.model.generate([Message.user("hi")]))

    def test_stream_chunks_concat_to_final_message(self) -> None:
        self.client.chat.completions.create.return_value = _Stream([
            _chunk(reasoning="think "),
            _chunk(reasoning="more", references=_REFERENCES[:1]),
            _chunk(content="Hel"),
            _chunk(content="lo", bot_usage=_USAGE),
            SimpleNamespace(id="chatcmpl-1", choices=[], bot_usage={"model_usage": [{"name": "rerank"}]}),
        ])

        async def collect():
            return [chunk async for chunk in self.model.stream([Message.user("hi")])]

        chunks = _run(collect())
        final = concat_messages(chunks, self.concat)

        self.assertEqual(len(chunks), 5)
        self.assertEqual(final.content, "Hello")
        self.assertEqual(get_ark_request_id(final), "chatcmpl-1")
        self.assertEqual(get_reasoning_content(final), ("think more", True))
        usage, _ = get_bot_usage(final)
        self.assertEqual([u.name for u in usage.model_usage], ["doubao-pro", "rerank"])
        refs, _ = get_bot_chat_result_reference(final)
        self.assertEqual([r.title for r in refs], ["Example"])

        kwargs = self.client.chat.completions.create.await_args.kwargs
        self.assertTrue(kwargs["stream"])

    def test_stream_error_wrapped(self) -> None:
        self.client.chat.completions.create.side_effect = OpenAIError("boom")

        async def collect():
            return [chunk async for chunk in self.model.stream([Message.user("hi")])]

        with self.assertRaises(ExternalServiceError):
            _run(collect())


if __name__ == "__main__":
    unittest.main()
