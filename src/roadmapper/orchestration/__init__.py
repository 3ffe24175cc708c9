"""Orchestration layer for Roadmapper.

Exposes RoadmapSession, which coordinates generation, the active roadmap,
and the saved history, answer_question for streamed research answers,
and the helpers they rely on.
"""

from .context import read_context_files, wrap_context_file
from .progress import ProgressTracker
from .research import answer_question
from .session import GenerationAttempt, RoadmapSession

__all__ = [
    "GenerationAttempt",
    "ProgressTracker",
    "RoadmapSession",
    "answer_question",
    "read_context_files",
    "wrap_context_file",
]
