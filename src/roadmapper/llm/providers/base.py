"""Provider interface and the stream items every provider yields."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


@dataclass
class StreamChunk:
    """A fragment of generated text."""

    text: str


@dataclass
class StreamComplete:
    """End-of-stream marker carrying the provider's own view of the reply."""

    full_text: str
    cost_usd: float | None = None
    tokens_in: int | None = None
    tokens_out: int | None = None


class APIErrorType(Enum):
    """Why a provider call failed, as far as the error text tells."""

    RATE_LIMITED = "rate_limited"
    API_UNAVAILABLE = "api_unavailable"
    BUDGET_EXCEEDED = "budget_exceeded"
    UNKNOWN = "unknown"

    @property
    def hint(self) -> str | None:
        """Advice for the user, or None when there is nothing to add."""
        return _HINTS.get(self)


_HINTS = {
    APIErrorType.RATE_LIMITED: (
        "The provider is rate limiting requests; wait a minute and retry."
    ),
    APIErrorType.API_UNAVAILABLE: "The provider is unavailable right now; retry later.",
    APIErrorType.BUDGET_EXCEEDED: (
        "The account's spending limit is reached; check billing before retrying."
    ),
}

# Checked in order; spending limits mention "limit" too, so they go first.
ERROR_PATTERNS: dict[APIErrorType, tuple[str, ...]] = {
    APIErrorType.BUDGET_EXCEEDED: (
        "budget",
        "spending limit",
        "billing",
        "credit",
        "quota exceeded",
        "usage limit",
        "daily limit",
        "out of usage",
        "out of extra usage",
        "limit reached",
    ),
    APIErrorType.RATE_LIMITED: (
        "rate limit",
        "rate_limit",
        "ratelimit",
        "too many requests",
        "throttl",
        "429",
    ),
    APIErrorType.API_UNAVAILABLE: (
        "overloaded",
        "unavailable",
        "service error",
        "temporarily",
        "try again later",
        "capacity",
        "502",
        "503",
        "504",
    ),
}


def classify_api_error(error: Exception) -> APIErrorType:
    """Match the error message against ERROR_PATTERNS (case-insensitive)."""
    message = str(error).lower()
    for error_type, patterns in ERROR_PATTERNS.items():
        if any(pattern in message for pattern in patterns):
            return error_type
    return APIErrorType.UNKNOWN


class LLMProvider(ABC):
    """A streaming chat backend."""

    provider_name: str

    def __init__(self, model: str, api_key: str | None = None) -> None:
        self.model = model
        self.api_key = api_key

    @abstractmethod
    def stream_message(
        self,
        messages: list[dict[str, str]],
        system: str = "",
        max_tokens: int = 4096,
    ) -> Iterator[StreamChunk | StreamComplete]:
        """Stream one reply.

        Yields:
            StreamChunk for each text fragment, then one StreamComplete.

        Raises:
            TransportFailure: If the provider call fails.
        """
