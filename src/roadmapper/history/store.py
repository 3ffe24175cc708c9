"""Saved roadmap history.

The whole collection lives in one slot. It is read once when the store is
created and rewritten in full after every mutation; nothing is written
incrementally. Newly saved roadmaps go to the front, updates keep their
position.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any

from roadmapper.history.slots import DocumentSlot
from roadmapper.ingest.errors import StorageCorruption, StructuralFailure
from roadmapper.ingest.validation import restore_roadmap
from roadmapper.models.roadmap import Roadmap
from roadmapper.models.schema import (
    SchemaError,
    migrate_if_needed,
    write_schema_fields,
)

logger = logging.getLogger(__name__)

SCHEMA_TYPE = "roadmap_history"


def _decode(payload: str) -> list[Roadmap]:
    """Deserialize a slot payload.

    Raises:
        StorageCorruption: If the payload is not a roadmap history.
    """
    try:
        data: Any = json.loads(payload)
        data, migrated = migrate_if_needed(data, SCHEMA_TYPE)
    except (json.JSONDecodeError, RecursionError, SchemaError) as e:
        raise StorageCorruption(f"Unreadable roadmap history: {e}") from e
    if migrated:
        logger.info("History slot uses a legacy layout; rewritten on next save")

    entries = data.get("roadmaps")
    if not isinstance(entries, list):
        raise StorageCorruption("Unreadable roadmap history: 'roadmaps' is not a list")

    roadmaps: list[Roadmap] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        try:
            roadmap = restore_roadmap(entry)
        except (StructuralFailure, TypeError, ValueError) as e:
            logger.warning("Skipping malformed history entry %d: %s", index, e)
            continue
        if roadmap.id in seen:
            logger.warning("Skipping duplicate history entry %s", roadmap.id)
            continue
        seen.add(roadmap.id)
        roadmaps.append(roadmap)
    return roadmaps


def _encode(roadmaps: list[Roadmap]) -> str:
    return json.dumps(
        {
            **write_schema_fields(SCHEMA_TYPE),
            "roadmaps": [roadmap.to_dict() for roadmap in roadmaps],
        },
        indent=2,
    )


class HistoryStore:
    """Ordered collection of saved roadmaps, keyed by roadmap ID."""

    def __init__(self, slot: DocumentSlot) -> None:
        self._slot = slot
        self._roadmaps: list[Roadmap] = self._load()

    @property
    def name(self) -> str:
        """Name of the backing slot."""
        return self._slot.name

    def _load(self) -> list[Roadmap]:
        """Load the collection; an unreadable slot counts as empty."""
        try:
            payload = self._slot.read()
            if payload is None or not payload.strip():
                return []
            roadmaps = _decode(payload)
        except StorageCorruption as e:
            logger.warning("%s (slot %s); starting empty", e, self._slot.name)
            return []
        except OSError as e:
            logger.warning(
                "Could not read history slot %s: %s; starting empty",
                self._slot.name,
                e,
            )
            return []
        logger.info("Loaded %d roadmaps from slot %s", len(roadmaps), self._slot.name)
        return roadmaps

    def _commit(self, roadmaps: list[Roadmap]) -> None:
        """Persist the new collection, then make it current.

        A failed write leaves the in-memory collection unchanged.
        """
        self._slot.write(_encode(roadmaps))
        self._roadmaps = roadmaps

    def _index_of(self, roadmap_id: str) -> int | None:
        for i, roadmap in enumerate(self._roadmaps):
            if roadmap.id == roadmap_id:
                return i
        return None

    def upsert(self, roadmap: Roadmap) -> None:
        """Save a roadmap, replacing any entry with the same ID in place."""
        roadmaps = list(self._roadmaps)
        index = self._index_of(roadmap.id)
        if index is None:
            roadmaps.insert(0, roadmap)
            logger.info("Saved new roadmap %s", roadmap.id)
        else:
            roadmaps[index] = roadmap
            logger.info("Updated roadmap %s at position %d", roadmap.id, index)
        self._commit(roadmaps)

    def remove(self, roadmap_id: str) -> None:
        """Delete a roadmap if present; unknown IDs are ignored."""
        if self._index_of(roadmap_id) is None:
            logger.debug("Remove ignored, no roadmap %s", roadmap_id)
            return
        self._commit([r for r in self._roadmaps if r.id != roadmap_id])
        logger.info("Removed roadmap %s", roadmap_id)

    def get(self, roadmap_id: str) -> Roadmap | None:
        """Get a saved roadmap by ID."""
        index = self._index_of(roadmap_id)
        return None if index is None else self._roadmaps[index]

    def contains(self, roadmap_id: str) -> bool:
        """Check whether a roadmap with this ID has been saved."""
        return self._index_of(roadmap_id) is not None

    def __len__(self) -> int:
        return len(self._roadmaps)

    def __iter__(self) -> Iterator[Roadmap]:
        return iter(list(self._roadmaps))

    def list(self) -> list[Roadmap]:
        """All saved roadmaps, newest first."""
        return list(self._roadmaps)
