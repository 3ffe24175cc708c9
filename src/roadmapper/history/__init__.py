"""Persistence of saved roadmaps."""
from __future__ import annotations

from pathlib import Path

from roadmapper.config.paths import get_paths
from roadmapper.config.settings import settings

from .slots import DocumentSlot, FileSlot, MemorySlot
from .store import HistoryStore


def open_history(path: Path | None = None) -> HistoryStore:
    """Open the history store at ``path`` or the configured slot file."""
    slot_path = path or get_paths().slot_file(
        settings.history_slot, settings.data_directory
    )
    return HistoryStore(FileSlot(slot_path))


__all__ = [
    "DocumentSlot",
    "FileSlot",
    "HistoryStore",
    "MemorySlot",
    "open_history",
]
