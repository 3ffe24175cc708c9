"""Roadmap data model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class RoadmapSource:
    """A web source the model used to ground the roadmap."""

    uri: str
    title: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"uri": self.uri, "title": self.title}


@dataclass(frozen=True, slots=True)
class RoadmapNode:
    """A single step or phase within a roadmap."""

    id: str
    title: str
    content: str
    references: tuple[str, ...] = ()
    connections: tuple[str, ...] = ()
    completed: bool = False

    def toggled(self) -> RoadmapNode:
        """Return a copy with the completion flag flipped."""
        return replace(self, completed=not self.completed)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "references": list(self.references),
            "connections": list(self.connections),
            "completed": self.completed,
        }


@dataclass(frozen=True, slots=True)
class Roadmap:
    """A canonical roadmap document.

    Instances are immutable values. Progress changes produce a new Roadmap
    with the same id (see ``with_node``). Stored dictionaries are turned back
    into Roadmaps by ``roadmapper.ingest.validation.restore_roadmap``, which
    applies the same checks as freshly generated payloads.
    """

    id: str
    generated_at: datetime
    title: str
    description: str = ""
    nodes: tuple[RoadmapNode, ...] = ()
    sources: tuple[RoadmapSource, ...] = field(default=())

    def get_node(self, node_id: str) -> RoadmapNode | None:
        """Get a node by ID."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def with_node(self, node: RoadmapNode) -> Roadmap:
        """Return a copy with the node of the same ID replaced.

        The node keeps its position. Returns ``self`` when no node matches.
        """
        for i, existing in enumerate(self.nodes):
            if existing.id == node.id:
                nodes = self.nodes[:i] + (node,) + self.nodes[i + 1 :]
                return replace(self, nodes=nodes)
        return self

    @property
    def completed_count(self) -> int:
        """Number of nodes marked complete."""
        return sum(1 for node in self.nodes if node.completed)

    @property
    def progress(self) -> float:
        """Completion percentage (0-100)."""
        if not self.nodes:
            return 0.0
        return self.completed_count / len(self.nodes) * 100

    def unresolved_connections(self) -> list[tuple[str, str]]:
        """List (node_id, target_id) pairs pointing at missing nodes."""
        known = {node.id for node in self.nodes}
        return [
            (node.id, target)
            for node in self.nodes
            for target in node.connections
            if target not in known
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "generated_at": self.generated_at.isoformat(),
            "title": self.title,
            "description": self.description,
            "nodes": [node.to_dict() for node in self.nodes],
            "sources": [source.to_dict() for source in self.sources],
        }
