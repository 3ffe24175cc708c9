"""LLM provider implementations."""
from __future__ import annotations

from roadmapper.llm.providers.base import (
    APIErrorType,
    LLMProvider,
    StreamChunk,
    StreamComplete,
    classify_api_error,
)

__all__ = [
    "APIErrorType",
    "LLMProvider",
    "StreamChunk",
    "StreamComplete",
    "classify_api_error",
]
