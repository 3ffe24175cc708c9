"""Toggle command: flip a node's completion on a saved roadmap."""

from __future__ import annotations

import argparse
import sys

from rich.text import Text

from roadmapper.cli.context import load_roadmap_or_error, open_session
from roadmapper.cli.render import make_console, progress_summary


def cmd_toggle(args: argparse.Namespace) -> int:
    """Mark a node complete or incomplete and persist the change."""
    session = open_session(args)
    roadmap = load_roadmap_or_error(session, args.roadmap_id)
    if roadmap is None:
        return 1
    if roadmap.get_node(args.node_id) is None:
        print(
            f"Error: Node '{args.node_id}' not found in roadmap '{roadmap.id}'",
            file=sys.stderr,
        )
        return 1

    try:
        updated = session.toggle(args.node_id)
    except OSError as e:
        print(f"Error: Could not save roadmap: {e}", file=sys.stderr)
        return 1

    node = updated.get_node(args.node_id)
    assert node is not None
    state = "complete" if node.completed else "incomplete"
    console = make_console()
    console.print(Text(f"{node.title}: {state}"), soft_wrap=True)
    console.print(progress_summary(updated), soft_wrap=True)
    return 0
