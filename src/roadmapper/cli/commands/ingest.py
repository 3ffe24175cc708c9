"""Ingest command: build a roadmap from captured model output."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from roadmapper.cli.context import open_session
from roadmapper.cli.render import make_console, render_roadmap
from roadmapper.ingest.errors import RoadmapError


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def cmd_ingest(args: argparse.Namespace) -> int:
    """Extract, validate and optionally save a roadmap from a file or stdin."""
    try:
        text = _read_input(args.file)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Failed to read file: {args.file} ({e})", file=sys.stderr)
        return 1

    session = open_session(args)
    try:
        roadmap = session.ingest(text)
        if args.save:
            session.save()
    except RoadmapError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Could not save roadmap: {e}", file=sys.stderr)
        return 1

    console = make_console()
    render_roadmap(console, roadmap, saved=session.is_saved)
    if args.save:
        console.print(f"Saved roadmap {roadmap.id}", soft_wrap=True)
    return 0
