"""Show command: render one saved roadmap."""

from __future__ import annotations

import argparse

from roadmapper.cli.context import load_roadmap_or_error, open_session
from roadmapper.cli.render import make_console, render_roadmap


def cmd_show(args: argparse.Namespace) -> int:
    session = open_session(args)
    roadmap = load_roadmap_or_error(session, args.roadmap_id)
    if roadmap is None:
        return 1
    render_roadmap(make_console(), roadmap, saved=True)
    return 0
