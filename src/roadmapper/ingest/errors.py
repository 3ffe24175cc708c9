"""Error types for roadmap ingestion and storage."""

from __future__ import annotations

from roadmapper.llm.providers.base import APIErrorType


class RoadmapError(Exception):
    """Base class for all roadmap pipeline errors.

    The message is shown to the user as-is.
    """


class TransportFailure(RoadmapError):
    """The fragment producer failed before completing the stream."""

    def __init__(
        self, message: str, error_type: APIErrorType = APIErrorType.UNKNOWN
    ) -> None:
        super().__init__(message)
        self.error_type = error_type


class ExtractionFailure(RoadmapError):
    """No JSON payload could be recovered from the model output."""

    def __init__(
        self,
        message: str,
        candidate: str | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.candidate = candidate
        self.detail = detail


class StructuralFailure(RoadmapError):
    """The parsed payload lacks the fields a roadmap cannot exist without."""


class StorageCorruption(RoadmapError):
    """A storage slot holds content that cannot be deserialized."""


class GenerationCancelled(RoadmapError):
    """A generation attempt was superseded by a newer one."""

    def __init__(self, attempt_id: int) -> None:
        super().__init__(f"generation attempt {attempt_id} was superseded")
        self.attempt_id = attempt_id


class ContextFileError(RoadmapError):
    """A supporting document could not be read."""
