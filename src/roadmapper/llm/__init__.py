"""LLM clients for Roadmapper."""
from __future__ import annotations

from .client import create_provider
from .prompts import (
    RESEARCH_SYSTEM_PROMPT,
    ROADMAP_SYSTEM_PROMPT,
    build_roadmap_prompt,
)
from .providers import (
    APIErrorType,
    LLMProvider,
    StreamChunk,
    StreamComplete,
    classify_api_error,
)

__all__ = [
    "APIErrorType",
    "LLMProvider",
    "RESEARCH_SYSTEM_PROMPT",
    "ROADMAP_SYSTEM_PROMPT",
    "StreamChunk",
    "StreamComplete",
    "build_roadmap_prompt",
    "classify_api_error",
    "create_provider",
]
