"""Shared context helpers for CLI command modules."""

from __future__ import annotations

import argparse
import sys

from roadmapper.history import HistoryStore, open_history
from roadmapper.ingest.errors import TransportFailure
from roadmapper.models.roadmap import Roadmap
from roadmapper.orchestration.session import RoadmapSession


def open_store(args: argparse.Namespace) -> HistoryStore:
    """Open the history store selected on the command line."""
    return open_history(getattr(args, "history_file", None))


def open_session(args: argparse.Namespace) -> RoadmapSession:
    """Open a session over the selected history store."""
    return RoadmapSession(open_store(args))


def load_roadmap_or_error(session: RoadmapSession, roadmap_id: str) -> Roadmap | None:
    """Load a saved roadmap or print a user-facing error and return None."""
    roadmap = session.load(roadmap_id)
    if roadmap is None:
        print(f"Error: Roadmap '{roadmap_id}' not found", file=sys.stderr)
        print(f"  Looked in: {session.store.name}", file=sys.stderr)
    return roadmap


def print_failure(error: Exception) -> None:
    """Print a failed operation to stderr, with advice for provider errors."""
    print(f"Error: {error}", file=sys.stderr)
    if isinstance(error, TransportFailure) and error.error_type.hint:
        print(f"  {error.error_type.hint}", file=sys.stderr)
