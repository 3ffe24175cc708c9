"""Tests for RoadmapSession."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

import pytest

from roadmapper.config.settings import settings
from roadmapper.history import HistoryStore, MemorySlot
from roadmapper.ingest.errors import (
    ExtractionFailure,
    GenerationCancelled,
    StructuralFailure,
    TransportFailure,
)
from roadmapper.llm.prompts import ROADMAP_SYSTEM_PROMPT
from roadmapper.llm.providers.base import LLMProvider, StreamChunk, StreamComplete
from roadmapper.orchestration.session import EMPTY_GOAL_MESSAGE, RoadmapSession


class StubLLM(LLMProvider):
    """Replays one canned response per call."""

    provider_name = "stub"

    def __init__(self, responses: list[Any]) -> None:
        super().__init__(model="stub")
        self._responses = list(responses)
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
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        parts = [response] if isinstance(response, str) else response
        for part in parts:
            yield StreamChunk(text=part)
        yield StreamComplete(full_text="".join(parts))


def _fenced(payload: dict[str, Any]) -> str:
    return f"Here is your roadmap:\n```json\n{json.dumps(payload)}\n```"


def _session(*responses: Any) -> tuple[RoadmapSession, MemorySlot, StubLLM]:
    slot = MemorySlot()
    llm = StubLLM(list(responses))
    return RoadmapSession(HistoryStore(slot), llm=llm), slot, llm


class TestGenerate:
    """Tests for RoadmapSession.generate."""

    def test_generates_active_roadmap(self, roadmap_payload: dict[str, Any]) -> None:
        session, slot, llm = _session(_fenced(roadmap_payload))
        fragments: list[str] = []

        roadmap = session.generate("Learn Rust", on_fragment=fragments.append)

        assert session.active == roadmap
        assert roadmap.title == "Learn Rust"
        assert [n.id for n in roadmap.nodes] == ["basics", "ownership", "project"]
        assert fragments == [_fenced(roadmap_payload)]
        assert session.is_saved is False
        assert slot.writes == 0
        assert llm.calls[0]["system"] == ROADMAP_SYSTEM_PROMPT
        assert session.current_attempt is None

    def test_prompt_carries_goal_context_and_token_limit(
        self, roadmap_payload: dict[str, Any]
    ) -> None:
        settings.llm_max_tokens = 1234
        session, _, llm = _session(_fenced(roadmap_payload))

        session.generate("Learn Rust", context="--- START OF FILE: a.md ---")

        call = llm.calls[0]
        assert call["max_tokens"] == 1234
        prompt = call["messages"][0]["content"]
        assert "Learn Rust" in prompt
        assert "START OF FILE: a.md" in prompt

    def test_fragments_split_across_chunks(self, roadmap_payload: dict[str, Any]) -> None:
        text = json.dumps(roadmap_payload)
        chunks = [text[i : i + 7] for i in range(0, len(text), 7)]
        session, _, _ = _session(chunks)
        assert session.generate("Learn Rust").title == "Learn Rust"

    @pytest.mark.parametrize("goal", ["", "   \n"])
    def test_empty_goal_rejected(self, goal: str) -> None:
        session, _, llm = _session()
        with pytest.raises(ValueError, match=EMPTY_GOAL_MESSAGE):
            session.generate(goal)
        assert llm.calls == []


class TestGenerateFailures:
    """A failed attempt keeps the previous active roadmap."""

    def _with_active(
        self, roadmap_payload: dict[str, Any], failure: Any
    ) -> RoadmapSession:
        session, _, _ = _session(_fenced(roadmap_payload), failure)
        session.generate("first")
        return session

    def test_transport_failure(self, roadmap_payload: dict[str, Any]) -> None:
        session = self._with_active(roadmap_payload, ConnectionError("503 overloaded"))
        previous = session.active
        with pytest.raises(TransportFailure, match="503 overloaded"):
            session.generate("second")
        assert session.active is previous

    def test_extraction_failure(self, roadmap_payload: dict[str, Any]) -> None:
        session = self._with_active(roadmap_payload, "Sorry, I can't do that.")
        previous = session.active
        with pytest.raises(ExtractionFailure):
            session.generate("second")
        assert session.active is previous

    def test_structural_failure(self, roadmap_payload: dict[str, Any]) -> None:
        session = self._with_active(
            roadmap_payload, '{"nodes": [{"id": "a", "title": "A"}]}'
        )
        previous = session.active
        with pytest.raises(StructuralFailure):
            session.generate("second")
        assert session.active is previous


class TestCancellation:
    """Starting a new attempt cancels the one in flight."""

    def test_superseded_attempt_is_discarded(
        self, roadmap_payload: dict[str, Any]
    ) -> None:
        newer = dict(roadmap_payload, title="Newer plan")
        older_text = json.dumps(roadmap_payload)
        session, _, _ = _session(
            [older_text[:10], older_text[10:]],
            _fenced(newer),
        )
        results: list[str] = []

        def on_fragment(_: str) -> None:
            if not results:
                results.append(session.generate("newer").title)

        with pytest.raises(GenerationCancelled) as excinfo:
            session.generate("older", on_fragment=on_fragment)

        assert excinfo.value.attempt_id == 1
        assert results == ["Newer plan"]
        assert session.active is not None
        assert session.active.title == "Newer plan"

    def test_start_attempt_cancels_previous(self) -> None:
        session, _, _ = _session()
        first = session.start_attempt("a")
        second = session.start_attempt("b")
        assert first.cancelled is True
        assert second.cancelled is False
        assert session.current_attempt is second
        assert second.attempt_id == first.attempt_id + 1


class TestUserActions:
    """Save, load, delete and toggle."""

    def test_save_then_toggle_updates_both_copies(
        self, roadmap_payload: dict[str, Any]
    ) -> None:
        session, slot, _ = _session()
        session.ingest(_fenced(roadmap_payload))
        session.save()
        assert session.is_saved

        session.toggle("basics")

        assert session.active.get_node("basics").completed is True  # type: ignore[union-attr]
        stored = session.store.get(session.active.id)  # type: ignore[union-attr]
        assert stored == session.active
        assert slot.writes == 2

    def test_toggle_unsaved_only_changes_active(
        self, roadmap_payload: dict[str, Any]
    ) -> None:
        session, slot, _ = _session()
        session.ingest(_fenced(roadmap_payload))
        session.toggle("basics")
        assert session.active.completed_count == 1  # type: ignore[union-attr]
        assert slot.writes == 0

    def test_save_twice_keeps_one_entry(self, roadmap_payload: dict[str, Any]) -> None:
        session, _, _ = _session()
        session.ingest(_fenced(roadmap_payload))
        session.save()
        session.save()
        assert len(session.store) == 1

    def test_save_without_active(self) -> None:
        session, _, _ = _session()
        with pytest.raises(RuntimeError):
            session.save()

    def test_toggle_without_active(self) -> None:
        session, _, _ = _session()
        with pytest.raises(RuntimeError):
            session.toggle("a")

    def test_load_and_delete(self, roadmap_payload: dict[str, Any]) -> None:
        session, _, _ = _session()
        saved = session.ingest(_fenced(roadmap_payload))
        session.save()
        session.ingest(_fenced(dict(roadmap_payload, title="Other")))

        assert session.load(saved.id) == saved
        assert session.active == saved

        session.delete(saved.id)
        assert session.active is None
        assert len(session.store) == 0

    def test_load_unknown_keeps_active(self, roadmap_payload: dict[str, Any]) -> None:
        session, _, _ = _session()
        active = session.ingest(_fenced(roadmap_payload))
        assert session.load("missing") is None
        assert session.active is active

    def test_delete_other_keeps_active(self, roadmap_payload: dict[str, Any]) -> None:
        session, _, _ = _session()
        active = session.ingest(_fenced(roadmap_payload))
        session.delete("missing")
        assert session.active is active

    def test_failed_ingest_keeps_active(self, roadmap_payload: dict[str, Any]) -> None:
        session, _, _ = _session()
        active = session.ingest(_fenced(roadmap_payload))
        with pytest.raises(ExtractionFailure):
            session.ingest("nothing here")
        assert session.active is active
