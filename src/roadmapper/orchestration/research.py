"""Streamed answers to free-form research questions.

Shares the StreamConsumer contract with roadmap generation: fragments are
forwarded as they arrive and the joined text is the answer. Answers are
Markdown for display and are neither parsed nor stored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from roadmapper.config.settings import settings
from roadmapper.ingest.errors import RoadmapError
from roadmapper.ingest.stream import (
    FragmentCallback,
    StreamCallbacks,
    StreamConsumer,
    StreamItem,
)
from roadmapper.llm.client import create_provider
from roadmapper.llm.prompts import RESEARCH_SYSTEM_PROMPT
from roadmapper.llm.providers.base import LLMProvider

logger = logging.getLogger(__name__)

EMPTY_QUESTION_MESSAGE = "Question cannot be empty."


def answer_question(
    question: str,
    llm: LLMProvider | None = None,
    on_fragment: FragmentCallback | None = None,
) -> str:
    """Stream an answer to a research question.

    Args:
        question: The question to answer.
        llm: Provider to use (defaults to the configured one).
        on_fragment: Called with each streamed fragment.

    Returns:
        The full Markdown answer.

    Raises:
        ValueError: If the question is empty.
        TransportFailure: If the provider call fails.
    """
    if not question.strip():
        raise ValueError(EMPTY_QUESTION_MESSAGE)

    provider = llm if llm is not None else create_provider()
    logger.info("Answering research question %r", question)

    def produce() -> Iterator[StreamItem]:
        yield from provider.stream_message(
            messages=[{"role": "user", "content": question.strip()}],
            system=RESEARCH_SYSTEM_PROMPT,
            max_tokens=settings.llm_max_tokens,
        )

    failures: list[RoadmapError] = []
    consumer = StreamConsumer(
        StreamCallbacks(on_fragment=on_fragment, on_failure=failures.append)
    )
    answer = consumer.consume(produce())
    if failures:
        raise failures[0]
    assert answer is not None
    return answer
