"""Tests for the streaming LLM providers."""

from __future__ import annotations

import os
from types import SimpleNamespace

import pytest

from roadmapper.llm.providers.anthropic import WEB_SEARCH_TOOLS, AnthropicProvider
from roadmapper.llm.providers.base import StreamChunk, StreamComplete
from roadmapper.llm.providers.openai import OpenAIProvider


def _patch_sdk(monkeypatch: pytest.MonkeyPatch, messages: list[object]) -> dict:
    class FakeTextBlock:
        def __init__(self, text: str) -> None:
            self.text = text

    class FakeAssistantMessage:
        def __init__(self, content) -> None:
            self.content = content

    class FakeResultMessage:
        def __init__(self) -> None:
            self.total_cost_usd = 0.02
            self.usage = {"input_tokens": 11, "output_tokens": 7}

    captured: dict = {"options": None, "prompt": None}

    async def fake_query(*, prompt, options):
        captured["prompt"] = prompt
        captured["options"] = options
        for item in messages:
            if isinstance(item, str):
                yield FakeAssistantMessage([FakeTextBlock(item)])
            else:
                yield FakeResultMessage()

    module = "roadmapper.llm.providers.anthropic"
    monkeypatch.setattr(f"{module}.AssistantMessage", FakeAssistantMessage)
    monkeypatch.setattr(f"{module}.ResultMessage", FakeResultMessage)
    monkeypatch.setattr(f"{module}.TextBlock", FakeTextBlock)
    monkeypatch.setattr(f"{module}.query", fake_query)
    return captured


class TestAnthropicProvider:
    """Tests for AnthropicProvider.stream_message."""

    def test_streams_text_then_completion(self, monkeypatch: pytest.MonkeyPatch) -> None:
        captured = _patch_sdk(monkeypatch, ["{\"title\":", " \"T\"}", None])
        provider = AnthropicProvider(use_web_auth=True)

        items = list(
            provider.stream_message(
                [{"role": "user", "content": "Plan please"}], system="system"
            )
        )

        assert items[:2] == [StreamChunk(text='{"title":'), StreamChunk(text=' "T"}')]
        complete = items[-1]
        assert isinstance(complete, StreamComplete)
        assert complete.full_text == '{"title": "T"}'
        assert complete.cost_usd == pytest.approx(0.02)
        assert (complete.tokens_in, complete.tokens_out) == (11, 7)
        assert captured["prompt"] == "User: Plan please"
        assert captured["options"].allowed_tools == WEB_SEARCH_TOOLS

    def test_web_search_can_be_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        captured = _patch_sdk(monkeypatch, [None])
        provider = AnthropicProvider(use_web_auth=True, web_search=False)
        list(provider.stream_message([{"role": "user", "content": "x"}]))
        assert captured["options"].allowed_tools == []

    def test_api_key_env_restored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_sdk(monkeypatch, ["ok", None])
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        provider = AnthropicProvider(api_key="sk-test")
        list(provider.stream_message([{"role": "user", "content": "x"}]))
        assert "ANTHROPIC_API_KEY" not in os.environ


class TestOpenAIProvider:
    """Tests for OpenAIProvider.stream_message."""

    def test_streams_deltas_and_usage(self) -> None:
        def chunk(text: str | None, usage=None) -> SimpleNamespace:
            choices = (
                [SimpleNamespace(delta=SimpleNamespace(content=text))]
                if text is not None
                else []
            )
            return SimpleNamespace(choices=choices, usage=usage)

        calls: list[dict] = []

        def create(**kwargs):
            calls.append(kwargs)
            return iter(
                [
                    chunk("{"),
                    chunk("}"),
                    chunk(
                        None,
                        usage=SimpleNamespace(prompt_tokens=5, completion_tokens=2),
                    ),
                ]
            )

        fake_client = SimpleNamespace(
            chat=SimpleNamespace(completions=SimpleNamespace(create=create))
        )
        provider = OpenAIProvider(api_key="test-key", temperature=0.3)
        provider._get_client = lambda: fake_client  # type: ignore[method-assign]

        items = list(
            provider.stream_message(
                [{"role": "user", "content": "plan"}], system="sys", max_tokens=100
            )
        )

        assert items[:2] == [StreamChunk(text="{"), StreamChunk(text="}")]
        assert items[-1] == StreamComplete(full_text="{}", tokens_in=5, tokens_out=2)
        call = calls[0]
        assert call["messages"][0] == {"role": "system", "content": "sys"}
        assert call["max_tokens"] == 100
        assert call["temperature"] == 0.3
        assert call["stream"] is True

    def test_missing_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        provider = OpenAIProvider()
        with pytest.raises(ValueError, match="API key"):
            list(provider.stream_message([{"role": "user", "content": "x"}]))
