"""Node completion tracking for the active roadmap."""

from __future__ import annotations

import logging

from roadmapper.history.store import HistoryStore
from roadmapper.models.roadmap import Roadmap

logger = logging.getLogger(__name__)


class ProgressTracker:
    """Flips node completion and keeps saved roadmaps in step."""

    def __init__(self, store: HistoryStore) -> None:
        self._store = store

    def toggle(self, active: Roadmap, node_id: str) -> Roadmap:
        """Flip one node's completion flag.

        Returns a new Roadmap; ``active`` itself is never changed. If the
        roadmap has been saved, the new value is written to the history as
        well. Unknown node IDs leave everything as it was.
        """
        node = active.get_node(node_id)
        if node is None:
            logger.warning("Toggle ignored, no node %s in %s", node_id, active.id)
            return active

        updated = active.with_node(node.toggled())
        logger.info(
            "Node %s of %s marked %s",
            node_id,
            active.id,
            "complete" if not node.completed else "incomplete",
        )

        if self._store.contains(updated.id):
            self._store.upsert(updated)
        return updated
