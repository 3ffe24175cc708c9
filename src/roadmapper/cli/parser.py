"""Argument parser construction for Roadmapper CLI."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level CLI parser."""
    parser = argparse.ArgumentParser(
        description="Roadmapper - generate and track learning roadmaps"
    )
    parser.add_argument(
        "--workdir",
        "-w",
        type=Path,
        help="Working directory for logs (default: current directory)",
    )
    parser.add_argument(
        "--history-file",
        type=Path,
        help="History file to use (default: the configured storage slot)",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a roadmap for a goal",
    )
    generate_parser.add_argument(
        "goal",
        help="What the roadmap should help you achieve",
    )
    generate_parser.add_argument(
        "--context",
        "-c",
        type=Path,
        action="append",
        default=[],
        metavar="FILE",
        help="Text document to ground the roadmap in (repeatable)",
    )
    generate_parser.add_argument(
        "--save",
        action="store_true",
        help="Save the generated roadmap to the history",
    )
    generate_parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Do not echo the model output while it streams",
    )

    # Ingest command
    ingest_parser = subparsers.add_parser(
        "ingest",
        help="Build a roadmap from captured model output",
    )
    ingest_parser.add_argument(
        "file",
        help="File holding the model output, or - for stdin",
    )
    ingest_parser.add_argument(
        "--save",
        action="store_true",
        help="Save the roadmap to the history",
    )

    # Ask command
    ask_parser = subparsers.add_parser(
        "ask",
        help="Ask a research question and stream a sourced answer",
    )
    ask_parser.add_argument(
        "question",
        help="The question to research",
    )
    ask_parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Print only the final answer, not the stream",
    )

    # History command
    subparsers.add_parser(
        "history",
        help="List saved roadmaps, newest first",
    )

    # Show command
    show_parser = subparsers.add_parser(
        "show",
        help="Show a saved roadmap",
    )
    show_parser.add_argument("roadmap_id", help="Roadmap ID")

    # Toggle command
    toggle_parser = subparsers.add_parser(
        "toggle",
        help="Flip a node between complete and incomplete",
    )
    toggle_parser.add_argument("roadmap_id", help="Roadmap ID")
    toggle_parser.add_argument("node_id", help="Node ID")

    # Delete command
    delete_parser = subparsers.add_parser(
        "delete",
        help="Delete a saved roadmap",
    )
    delete_parser.add_argument("roadmap_id", help="Roadmap ID")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments from argv (or sys.argv when omitted)."""
    parser = build_parser()
    if argv is None:
        return parser.parse_args()
    return parser.parse_args(list(argv))
