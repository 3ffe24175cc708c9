"""Canonicalization of untrusted roadmap payloads.

The parsed model output is treated as an untyped tree. Every field is checked
for presence and type before use; only ``title`` and ``nodes`` are required,
everything else falls back to a deterministic default.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from roadmapper.ingest.errors import StructuralFailure
from roadmapper.models.roadmap import Roadmap, RoadmapNode, RoadmapSource

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "missing title or nodes"

ROADMAP_ID_PREFIX = "roadmap_"
NODE_ID_PREFIX = "node-"
UNTITLED_NODE = "Untitled Node"
EMPTY_CONTENT = "No content provided."


def new_roadmap_id(now: datetime) -> str:
    """Generate a roadmap ID from the creation time.

    A short random suffix keeps two roadmaps created in the same
    millisecond apart.
    """
    millis = int(now.timestamp() * 1000)
    return f"{ROADMAP_ID_PREFIX}{millis}_{uuid4().hex[:6]}"


def new_node_id(taken: set[str]) -> str:
    """Generate a short node ID not present in ``taken``."""
    while True:
        candidate = f"{NODE_ID_PREFIX}{uuid4().hex[:9]}"
        if candidate not in taken:
            return candidate


def _non_empty_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _as_identifier(value: Any) -> str | None:
    """Accept string IDs and integer IDs (models often number their nodes)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    text = _non_empty_str(value)
    return text.strip() if text else None


def _string_list(value: Any) -> tuple[str, ...]:
    """Keep string entries of a list; anything that isn't a list is dropped."""
    if not isinstance(value, list):
        return ()
    return tuple(item for item in value if isinstance(item, str))


def _id_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    ids = (_as_identifier(item) for item in value)
    return tuple(item for item in ids if item is not None)


def _sources(value: Any) -> tuple[RoadmapSource, ...]:
    if not isinstance(value, list):
        return ()
    sources: list[RoadmapSource] = []
    for item in value:
        if not isinstance(item, Mapping):
            continue
        uri = _non_empty_str(item.get("uri"))
        if uri is None:
            continue
        title = _non_empty_str(item.get("title")) or uri
        sources.append(RoadmapSource(uri=uri, title=title))
    return tuple(sources)


def _nodes(value: list[Any], keep_completed: bool = False) -> tuple[RoadmapNode, ...]:
    # IDs supplied by the model are reserved first so a generated ID can
    # never take an ID a later node asked for.
    supplied = {
        node_id
        for item in value
        if isinstance(item, Mapping)
        and (node_id := _as_identifier(item.get("id"))) is not None
    }
    taken: set[str] = set(supplied)
    used: set[str] = set()
    nodes: list[RoadmapNode] = []

    for index, item in enumerate(value):
        if not isinstance(item, Mapping):
            logger.warning("Dropping node %d: expected object, got %s", index, item)
            continue

        node_id = _as_identifier(item.get("id"))
        if node_id is None or node_id in used:
            if node_id is not None:
                logger.warning("Duplicate node id %r re-issued", node_id)
            node_id = new_node_id(taken)
            taken.add(node_id)
        used.add(node_id)

        nodes.append(
            RoadmapNode(
                id=node_id,
                title=_non_empty_str(item.get("title")) or UNTITLED_NODE,
                content=_non_empty_str(item.get("content")) or EMPTY_CONTENT,
                references=_string_list(item.get("references")),
                connections=_id_list(item.get("connections")),
                completed=keep_completed and item.get("completed") is True,
            )
        )
    return tuple(nodes)


def _required_fields(data: Any) -> tuple[str, list[Any]]:
    if not isinstance(data, Mapping):
        raise StructuralFailure(MISSING_FIELDS_MESSAGE)
    title = _non_empty_str(data.get("title"))
    raw_nodes = data.get("nodes")
    if title is None or not isinstance(raw_nodes, list):
        raise StructuralFailure(MISSING_FIELDS_MESSAGE)
    return title, raw_nodes


def _description(data: Mapping[str, Any]) -> str:
    description = data.get("description")
    return description if isinstance(description, str) else ""


def _generated_at(data: Mapping[str, Any]) -> datetime:
    """Read a stored creation timestamp.

    Current files store ``generated_at`` as ISO-8601. Histories exported from
    the browser app store ``generatedAt`` as Unix milliseconds.
    """
    if "generated_at" in data:
        stamp = data["generated_at"]
        if not isinstance(stamp, str):
            raise ValueError(f"Invalid generated_at value: {stamp!r}")
        return datetime.fromisoformat(stamp)
    millis = data.get("generatedAt")
    if isinstance(millis, bool) or not isinstance(millis, (int, float)):
        raise ValueError(f"Invalid generatedAt value: {millis!r}")
    return datetime.fromtimestamp(millis / 1000, tz=UTC)


def validate_roadmap(data: Any, now: datetime | None = None) -> Roadmap:
    """Turn a parsed model payload into a canonical Roadmap.

    Args:
        data: The parsed, untrusted JSON value.
        now: Creation time (defaults to the current time).

    Returns:
        A Roadmap with a fresh ID and timestamp and every node defaulted.

    Raises:
        StructuralFailure: If the payload is not an object with a non-empty
            string ``title`` and an array ``nodes``.
    """
    title, raw_nodes = _required_fields(data)

    created = now or datetime.now().astimezone()
    roadmap = Roadmap(
        id=new_roadmap_id(created),
        generated_at=created,
        title=title,
        description=_description(data),
        nodes=_nodes(raw_nodes),
        sources=_sources(data.get("sources")),
    )
    logger.info(
        "Validated roadmap %s: %d nodes, %d sources",
        roadmap.id,
        len(roadmap.nodes),
        len(roadmap.sources),
    )
    return roadmap


def restore_roadmap(data: Any) -> Roadmap:
    """Rebuild a saved roadmap from its stored dictionary.

    Applies the same checks and defaults as ``validate_roadmap`` but keeps the
    stored ID, timestamp and completion flags. Duplicate node IDs are
    re-issued.

    Raises:
        StructuralFailure: If the title or nodes are missing or the ID is
            not a string or integer.
        ValueError: If the timestamp cannot be read.
    """
    title, raw_nodes = _required_fields(data)
    roadmap_id = _as_identifier(data.get("id"))
    if roadmap_id is None:
        raise StructuralFailure("missing roadmap id")
    return Roadmap(
        id=roadmap_id,
        generated_at=_generated_at(data),
        title=title,
        description=_description(data),
        nodes=_nodes(raw_nodes, keep_completed=True),
        sources=_sources(data.get("sources")),
    )
