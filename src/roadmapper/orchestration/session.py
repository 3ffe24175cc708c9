"""Roadmap session: the active roadmap and its generation attempts.

Owns the flow from a user goal to a canonical roadmap:

    provider fragments -> StreamConsumer -> extract_document -> validate_roadmap

and the explicit user actions on the result (save, load, delete, toggle).

Only one generation attempt is current at a time. Starting an attempt
cancels the previous one; a cancelled attempt stops reading its stream and
its output is discarded, so a stale response can never replace the roadmap
of a newer request.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from roadmapper.config.settings import settings
from roadmapper.history.store import HistoryStore
from roadmapper.ingest.errors import RoadmapError
from roadmapper.ingest.extraction import extract_document
from roadmapper.ingest.stream import (
    FragmentCallback,
    StreamCallbacks,
    StreamConsumer,
    StreamItem,
)
from roadmapper.ingest.validation import validate_roadmap
from roadmapper.llm.client import create_provider
from roadmapper.llm.prompts import ROADMAP_SYSTEM_PROMPT, build_roadmap_prompt
from roadmapper.llm.providers.base import LLMProvider
from roadmapper.models.roadmap import Roadmap
from roadmapper.orchestration.progress import ProgressTracker

logger = logging.getLogger(__name__)

EMPTY_GOAL_MESSAGE = "Prompt cannot be empty."


@dataclass
class GenerationAttempt:
    """One call to the model for one goal."""

    attempt_id: int
    goal: str
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class _AttemptOutcome:
    text: str | None = None
    error: RoadmapError | None = None


class RoadmapSession:
    """Holds the active roadmap and routes user actions to the history."""

    def __init__(
        self,
        store: HistoryStore,
        llm: LLMProvider | None = None,
        tracker: ProgressTracker | None = None,
    ) -> None:
        self.store = store
        self.llm = llm
        self.tracker = tracker or ProgressTracker(store)
        self.active: Roadmap | None = None
        self._attempt_count = 0
        self._current_attempt: GenerationAttempt | None = None

    # ─── Generation ───────────────────────────────────────────────────

    @property
    def current_attempt(self) -> GenerationAttempt | None:
        """The attempt in flight, if any."""
        return self._current_attempt

    def start_attempt(self, goal: str) -> GenerationAttempt:
        """Begin a new attempt, cancelling the one in flight."""
        if self._current_attempt is not None:
            logger.info(
                "Cancelling attempt %d in favour of a new request",
                self._current_attempt.attempt_id,
            )
            self._current_attempt.cancel()
        self._attempt_count += 1
        attempt = GenerationAttempt(attempt_id=self._attempt_count, goal=goal)
        self._current_attempt = attempt
        return attempt

    def generate(
        self,
        goal: str,
        context: str = "",
        on_fragment: FragmentCallback | None = None,
    ) -> Roadmap:
        """Generate a roadmap for a goal and make it the active roadmap.

        Args:
            goal: What the roadmap should achieve.
            context: Text of supporting documents (see read_context_files).
            on_fragment: Called with each streamed fragment.

        Returns:
            The new active roadmap (not yet saved).

        Raises:
            ValueError: If the goal is empty.
            TransportFailure, ExtractionFailure, StructuralFailure: The
                attempt failed; the previous active roadmap is kept.
            GenerationCancelled: A newer attempt superseded this one.
        """
        if not goal.strip():
            raise ValueError(EMPTY_GOAL_MESSAGE)

        attempt = self.start_attempt(goal)
        logger.info("Attempt %d: generating roadmap for %r", attempt.attempt_id, goal)
        if self.llm is None:
            self.llm = create_provider()
        llm = self.llm
        prompt = build_roadmap_prompt(goal, context)

        def produce() -> Iterator[StreamItem]:
            yield from llm.stream_message(
                messages=[{"role": "user", "content": prompt}],
                system=ROADMAP_SYSTEM_PROMPT,
                max_tokens=settings.llm_max_tokens,
            )

        outcome = _AttemptOutcome()

        def on_done(text: str) -> None:
            outcome.text = text

        def on_failure(error: RoadmapError) -> None:
            outcome.error = error

        consumer = StreamConsumer(
            StreamCallbacks(
                on_fragment=on_fragment,
                on_done=on_done,
                on_failure=on_failure,
            ),
            is_cancelled=lambda: attempt.cancelled,
            attempt_id=attempt.attempt_id,
        )
        try:
            consumer.consume(produce())
        finally:
            if self._current_attempt is attempt:
                self._current_attempt = None

        if outcome.error is not None:
            raise outcome.error
        assert outcome.text is not None
        return self._adopt(outcome.text)

    def ingest(self, text: str) -> Roadmap:
        """Build the active roadmap from already captured model output."""
        return self._adopt(text)

    def _adopt(self, text: str) -> Roadmap:
        roadmap = validate_roadmap(extract_document(text))
        self.active = roadmap
        return roadmap

    # ─── User Actions ─────────────────────────────────────────────────

    @property
    def is_saved(self) -> bool:
        """Whether the active roadmap is in the history."""
        return self.active is not None and self.store.contains(self.active.id)

    def save(self) -> Roadmap:
        """Save the active roadmap, or update its saved copy."""
        if self.active is None:
            raise RuntimeError("No active roadmap")
        self.store.upsert(self.active)
        return self.active

    def load(self, roadmap_id: str) -> Roadmap | None:
        """Make a saved roadmap the active one."""
        roadmap = self.store.get(roadmap_id)
        if roadmap is not None:
            self.active = roadmap
        return roadmap

    def delete(self, roadmap_id: str) -> None:
        """Delete a saved roadmap; clears the view if it was active."""
        self.store.remove(roadmap_id)
        if self.active is not None and self.active.id == roadmap_id:
            self.active = None

    def toggle(self, node_id: str) -> Roadmap:
        """Flip a node's completion on the active roadmap."""
        if self.active is None:
            raise RuntimeError("No active roadmap")
        self.active = self.tracker.toggle(self.active, node_id)
        return self.active
