# tests/unit/llm/test_unit_base_client.py — v1
"""Tests for llm/base_client.py and the provider adapters."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from voxrelay.core.errors import LLMClientError
from voxrelay.llm.adapters.anthropic_adapter import AnthropicAdapter
from voxrelay.llm.adapters.openai_adapter import OpenAIAdapter
from voxrelay.llm.base_client import BaseLLMClient
from voxrelay.llm.models import Message


def _openai_client(choices, usage=None) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(
        return_value=SimpleNamespace(choices=choices, usage=usage, model="gpt-4o-mini")
    )
    return client


def _anthropic_client(content) -> MagicMock:
    client = MagicMock()
    client.messages.create = AsyncMock(
        return_value=SimpleNamespace(
            content=content,
            model="claude-3-5-haiku-latest",
            stop_reason="end_turn",
            usage=SimpleNamespace(input_tokens=10, output_tokens=4),
        )
    )
    return client


class TestBaseLLMClient:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseLLMClient()  # type: ignore[abstract]


class TestOpenAIAdapter:
    @pytest.mark.asyncio
    async def test_complete(self):
        client = _openai_client(
            [SimpleNamespace(message=SimpleNamespace(content="Hi there!"), finish_reason="stop")],
            usage=SimpleNamespace(prompt_tokens=7, completion_tokens=3),
        )
        adapter = OpenAIAdapter(model="gpt-4o-mini", client=client)

        resp = await adapter.complete(
            [Message(role="user", content="hello")], system="Be brief.", max_tokens=64,
        )

        assert resp.content == "Hi there!"
        assert resp.provider == "openai"
        assert resp.total_tokens == 10
        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": "Be brief."}
        assert kwargs["messages"][1] == {"role": "user", "content": "hello"}
        assert kwargs["max_tokens"] == 64

    @pytest.mark.asyncio
    async def test_no_choices(self):
        adapter = OpenAIAdapter(client=_openai_client([]))
        with pytest.raises(LLMClientError, match="no choices"):
            await adapter.complete([Message(role="user", content="hello")])

    @pytest.mark.asyncio
    async def test_null_content(self):
        client = _openai_client([SimpleNamespace(message=SimpleNamespace(content=None))])
        adapter = OpenAIAdapter(client=client)
        with pytest.raises(LLMClientError, match="no message content"):
            await adapter.complete([Message(role="user", content="hello")])

    @pytest.mark.asyncio
    async def test_empty_string_content_passes_through(self):
        client = _openai_client([SimpleNamespace(message=SimpleNamespace(content=""))])
        resp = await OpenAIAdapter(client=client).complete([Message(role="user", content="x")])
        assert resp.content == ""
        assert resp.input_tokens == 0

    def test_base_url_kept(self):
        adapter = OpenAIAdapter(base_url="http://localhost:8000/v1")
        assert adapter._base_url == "http://localhost:8000/v1"
        assert OpenAIAdapter(base_url="")._base_url is None


class TestAnthropicAdapter:
    @pytest.mark.asyncio
    async def test_complete(self):
        client = _anthropic_client(
            [SimpleNamespace(type="text", text="Hello "), SimpleNamespace(type="text", text="there")]
        )
        adapter = AnthropicAdapter(client=client)

        resp = await adapter.complete([Message(role="user", content="hi")], system="Be kind.")

        assert resp.content == "Hello there"
        assert resp.provider == "anthropic"
        assert resp.finish_reason == "end_turn"
        kwargs = client.messages.create.await_args.kwargs
        assert kwargs["system"] == "Be kind."
        assert kwargs["messages"] == [{"role": "user", "content": "hi"}]

    @pytest.mark.asyncio
    async def test_no_text_blocks(self):
        adapter = AnthropicAdapter(client=_anthropic_client([SimpleNamespace(type="tool_use")]))
        with pytest.raises(LLMClientError):
            await adapter.complete([Message(role="user", content="hi")])
