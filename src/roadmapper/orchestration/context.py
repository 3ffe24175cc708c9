"""Supporting-document context for roadmap generation."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from roadmapper.ingest.errors import ContextFileError

logger = logging.getLogger(__name__)


def wrap_context_file(name: str, text: str) -> str:
    """Wrap one document's text in filename-delimited separators."""
    return (
        f"\n--- START OF FILE: {name} ---\n"
        f"{text}\n"
        f"--- END OF FILE: {name} ---\n"
    )


def read_context_files(paths: Iterable[Path]) -> str:
    """Read text documents into a single context string.

    Raises:
        ContextFileError: If any file cannot be read as UTF-8 text.
    """
    sections: list[str] = []
    for path in paths:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ContextFileError(f"Failed to read file: {path.name}") from e
        logger.info("Loaded context file %s (%d chars)", path.name, len(text))
        sections.append(wrap_context_file(path.name, text))
    return "\n".join(sections)
