"""Accumulation of streamed model output for one generation attempt."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from roadmapper.ingest.errors import (
    GenerationCancelled,
    RoadmapError,
    TransportFailure,
)
from roadmapper.llm.providers.base import (
    StreamChunk,
    StreamComplete,
    classify_api_error,
)

logger = logging.getLogger(__name__)

StreamItem = StreamChunk | StreamComplete | str

FragmentCallback = Callable[[str], None]
"""Called for each non-empty fragment, in arrival order."""

DoneCallback = Callable[[str], None]
"""Called once with the concatenation of every fragment."""

FailureCallback = Callable[[RoadmapError], None]
"""Called once when the attempt ends without a complete text."""


@dataclass
class StreamCallbacks:
    """Callbacks a StreamConsumer reports to."""

    on_fragment: FragmentCallback | None = None
    on_done: DoneCallback | None = None
    on_failure: FailureCallback | None = None


def _fragment_text(item: StreamItem) -> str:
    if isinstance(item, StreamChunk):
        return item.text
    if isinstance(item, str):
        return item
    return ""


class StreamConsumer:
    """Consumes the fragments of a single generation attempt.

    Exactly one of ``on_done`` / ``on_failure`` fires per consumer. Errors
    raised by the producer become a TransportFailure; errors raised by the
    callbacks themselves propagate to the caller untouched.
    """

    def __init__(
        self,
        callbacks: StreamCallbacks,
        is_cancelled: Callable[[], bool] | None = None,
        attempt_id: int = 0,
    ) -> None:
        self._callbacks = callbacks
        self._is_cancelled = is_cancelled or (lambda: False)
        self._attempt_id = attempt_id
        self._consumed = False

    def consume(self, stream: Iterable[StreamItem]) -> str | None:
        """Drain the stream, forwarding fragments and one terminal event.

        Returns:
            The full text on completion, None on failure or cancellation.

        Raises:
            RuntimeError: If this consumer already handled an attempt.
        """
        if self._consumed:
            raise RuntimeError("StreamConsumer handles exactly one attempt")
        self._consumed = True

        parts: list[str] = []
        reported: str | None = None
        try:
            iterator = iter(stream)
        except Exception as exc:
            self._fail_transport(exc)
            return None

        while True:
            if self._is_cancelled():
                self._fail(GenerationCancelled(self._attempt_id))
                return None
            try:
                item = next(iterator)
            except StopIteration:
                break
            except Exception as exc:
                self._fail_transport(exc)
                return None

            if isinstance(item, StreamComplete):
                logger.debug(
                    "Producer reported completion: %d chars, cost=%s",
                    len(item.full_text),
                    item.cost_usd,
                )
                reported = item.full_text
                continue

            text = _fragment_text(item)
            if not text:
                continue
            parts.append(text)
            if self._callbacks.on_fragment is not None:
                self._callbacks.on_fragment(text)

        if self._is_cancelled():
            self._fail(GenerationCancelled(self._attempt_id))
            return None

        full_text = "".join(parts)
        if reported and reported != full_text:
            logger.debug(
                "Attempt %d: producer reported %d chars but %d were streamed",
                self._attempt_id,
                len(reported),
                len(full_text),
            )
        logger.info(
            "Attempt %d complete: %d fragments, %d chars",
            self._attempt_id,
            len(parts),
            len(full_text),
        )
        if self._callbacks.on_done is not None:
            self._callbacks.on_done(full_text)
        return full_text

    def _fail_transport(self, exc: Exception) -> None:
        message = str(exc) or type(exc).__name__
        failure = TransportFailure(message, error_type=classify_api_error(exc))
        failure.__cause__ = exc
        logger.warning(
            "Attempt %d failed in transport (%s): %s",
            self._attempt_id,
            failure.error_type.value,
            message,
        )
        self._fail(failure)

    def _fail(self, error: RoadmapError) -> None:
        if self._callbacks.on_failure is not None:
            self._callbacks.on_failure(error)
