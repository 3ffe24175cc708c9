"""Ask command: stream a sourced answer to a research question."""

from __future__ import annotations

import argparse

from rich.markdown import Markdown

from roadmapper.cli.context import print_failure
from roadmapper.cli.render import make_console
from roadmapper.ingest.errors import RoadmapError
from roadmapper.orchestration.research import answer_question


def cmd_ask(args: argparse.Namespace) -> int:
    """Answer a question, echoing the stream unless --quiet."""
    echo = make_console(stderr=True)

    def on_fragment(text: str) -> None:
        echo.out(text, end="", style="dim")

    try:
        answer = answer_question(
            args.question, on_fragment=None if args.quiet else on_fragment
        )
    except (RoadmapError, ValueError) as e:
        if not args.quiet:
            echo.out("")
        print_failure(e)
        return 1

    if not args.quiet:
        echo.out("")
    make_console().print(Markdown(answer))
    return 0
