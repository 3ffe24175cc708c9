"""Delete command: remove a saved roadmap."""

from __future__ import annotations

import argparse
import sys

from roadmapper.cli.context import open_session


def cmd_delete(args: argparse.Namespace) -> int:
    session = open_session(args)
    if not session.store.contains(args.roadmap_id):
        print(f"Error: Roadmap '{args.roadmap_id}' not found", file=sys.stderr)
        return 1
    try:
        session.delete(args.roadmap_id)
    except OSError as e:
        print(f"Error: Could not delete roadmap: {e}", file=sys.stderr)
        return 1
    print(f"Deleted roadmap {args.roadmap_id}")
    return 0
