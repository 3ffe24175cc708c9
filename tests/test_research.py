"""Tests for streamed research answers."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from roadmapper.config.settings import settings
from roadmapper.ingest.errors import TransportFailure
from roadmapper.llm.prompts import RESEARCH_SYSTEM_PROMPT
from roadmapper.llm.providers.base import (
    APIErrorType,
    LLMProvider,
    StreamChunk,
    StreamComplete,
)
from roadmapper.orchestration import research
from roadmapper.orchestration.research import EMPTY_QUESTION_MESSAGE, answer_question


class StubLLM(LLMProvider):
    """Streams fixed fragments, or raises partway through."""

    provider_name = "stub"

    def __init__(self, parts: list[str], error: Exception | None = None) -> None:
        super().__init__(model="stub")
        self._parts = parts
        self._error = error
        self.calls: list[dict[str, Any]] = []

    def stream_message(
        self,
        messages: list[dict[str, str]],
        system: str = "",
        max_tokens: int = 4096,
    ) -> Iterator[StreamChunk | StreamComplete]:
        self.calls.append(
            {"messages": messages, "system": system, "max_tokens": max_tokens}
        )
        for part in self._parts:
            yield StreamChunk(text=part)
        if self._error is not None:
            raise self._error
        yield StreamComplete(full_text="".join(self._parts))


class TestAnswerQuestion:
    """Tests for answer_question."""

    def test_streams_and_joins_fragments(self) -> None:
        llm = StubLLM(["## Key Takeaways\n", "- Scope 3 matters"])
        fragments: list[str] = []
        answer = answer_question(
            "What is scope 3?", llm=llm, on_fragment=fragments.append
        )
        assert answer == "## Key Takeaways\n- Scope 3 matters"
        assert fragments == ["## Key Takeaways\n", "- Scope 3 matters"]

    def test_request_shape(self) -> None:
        llm = StubLLM(["ok"])
        answer_question("  What is scope 3?  ", llm=llm)
        (call,) = llm.calls
        assert call["messages"] == [{"role": "user", "content": "What is scope 3?"}]
        assert call["system"] == RESEARCH_SYSTEM_PROMPT
        assert call["max_tokens"] == settings.llm_max_tokens

    @pytest.mark.parametrize("question", ["", "   "])
    def test_empty_question(self, question: str) -> None:
        llm = StubLLM(["unused"])
        with pytest.raises(ValueError, match=EMPTY_QUESTION_MESSAGE):
            answer_question(question, llm=llm)
        assert llm.calls == []

    def test_transport_failure_is_classified(self) -> None:
        llm = StubLLM(["partial"], error=RuntimeError("503 overloaded"))
        fragments: list[str] = []
        with pytest.raises(TransportFailure) as excinfo:
            answer_question("Why?", llm=llm, on_fragment=fragments.append)
        assert excinfo.value.error_type == APIErrorType.API_UNAVAILABLE
        assert fragments == ["partial"]

    def test_configured_provider_is_created_lazily(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        llm = StubLLM(["answer"])
        monkeypatch.setattr(research, "create_provider", lambda: llm)
        assert answer_question("Why?") == "answer"
        assert len(llm.calls) == 1
