"""Generate command: stream a new roadmap from the configured model."""

from __future__ import annotations

import argparse
import sys

from roadmapper.cli.context import open_session, print_failure
from roadmapper.cli.render import make_console, render_roadmap
from roadmapper.ingest.errors import RoadmapError
from roadmapper.orchestration.context import read_context_files


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate a roadmap for a goal and optionally save it."""
    try:
        context = read_context_files(args.context)
    except RoadmapError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    session = open_session(args)
    console = make_console()
    echo = make_console(stderr=True)

    def on_fragment(text: str) -> None:
        echo.out(text, end="", style="dim")

    try:
        roadmap = session.generate(
            args.goal,
            context=context,
            on_fragment=None if args.quiet else on_fragment,
        )
    except (RoadmapError, ValueError) as e:
        if not args.quiet:
            echo.out("")
        print_failure(e)
        return 1

    if not args.quiet:
        echo.out("")

    if args.save:
        try:
            session.save()
        except OSError as e:
            print(f"Error: Could not save roadmap: {e}", file=sys.stderr)
            return 1

    render_roadmap(console, roadmap, saved=session.is_saved)
    if args.save:
        console.print(f"Saved roadmap {roadmap.id}", soft_wrap=True)
    return 0
