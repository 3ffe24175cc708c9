"""Ingestion of streamed model output into canonical roadmaps."""
from __future__ import annotations

from .errors import (
    ContextFileError,
    ExtractionFailure,
    GenerationCancelled,
    RoadmapError,
    StorageCorruption,
    StructuralFailure,
    TransportFailure,
)
from .extraction import extract_document, find_candidate
from .stream import StreamCallbacks, StreamConsumer
from .validation import restore_roadmap, validate_roadmap

__all__ = [
    "ContextFileError",
    "ExtractionFailure",
    "GenerationCancelled",
    "RoadmapError",
    "StorageCorruption",
    "StreamCallbacks",
    "StreamConsumer",
    "StructuralFailure",
    "TransportFailure",
    "extract_document",
    "find_candidate",
    "restore_roadmap",
    "validate_roadmap",
]
