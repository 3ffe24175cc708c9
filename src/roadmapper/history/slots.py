"""Durable key-value slots backing the roadmap history."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from roadmapper.ingest.errors import StorageCorruption

logger = logging.getLogger(__name__)


class DocumentSlot(Protocol):
    """A single named slot holding one serialized document."""

    name: str

    def read(self) -> str | None:
        """Return the stored payload, or None if the slot is empty."""
        ...

    def write(self, payload: str) -> None:
        """Replace the stored payload."""
        ...


class FileSlot:
    """Slot stored as one JSON file, replaced atomically on every write."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.name = path.stem

    def read(self) -> str | None:
        """Read the file, or None when it does not exist yet.

        Raises:
            StorageCorruption: If the file is not UTF-8 text.
        """
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise StorageCorruption(f"Slot file {self.path} is not UTF-8 text") from e

    def write(self, payload: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            temp_path.replace(self.path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise
        logger.debug("Wrote %d chars to slot %s", len(payload), self.path)

    def __repr__(self) -> str:
        return f"FileSlot({str(self.path)!r})"


class MemorySlot:
    """In-memory slot for tests and throwaway sessions."""

    def __init__(self, name: str = "memory", payload: str | None = None) -> None:
        self.name = name
        self.payload = payload
        self.writes = 0

    def read(self) -> str | None:
        return self.payload

    def write(self, payload: str) -> None:
        self.payload = payload
        self.writes += 1
