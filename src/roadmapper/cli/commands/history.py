"""History command: list saved roadmaps."""

from __future__ import annotations

import argparse

from roadmapper.cli.context import open_store
from roadmapper.cli.render import make_console, render_history


def cmd_history(args: argparse.Namespace) -> int:
    """List saved roadmaps, newest first."""
    store = open_store(args)
    console = make_console()
    roadmaps = store.list()
    if not roadmaps:
        console.print("No saved roadmaps.")
        return 0
    render_history(console, roadmaps)
    return 0
