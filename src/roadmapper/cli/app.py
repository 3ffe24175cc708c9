"""CLI orchestration and command routing."""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path

from roadmapper.cli.commands import (
    cmd_ask,
    cmd_delete,
    cmd_generate,
    cmd_history,
    cmd_ingest,
    cmd_show,
    cmd_toggle,
)
from roadmapper.cli.parser import build_parser, parse_args
from roadmapper.config.paths import reset_paths

logger = logging.getLogger(__name__)


def dispatch(args: argparse.Namespace) -> int:
    """Route parsed args to the correct command handler."""
    command_handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "generate": cmd_generate,
        "ingest": cmd_ingest,
        "ask": cmd_ask,
        "history": cmd_history,
        "show": cmd_show,
        "toggle": cmd_toggle,
        "delete": cmd_delete,
    }

    handler = command_handlers.get(args.command) if args.command else None
    if handler is None:
        build_parser().print_help()
        return 2

    return handler(args)


def run(
    argv: Sequence[str] | None = None,
    *,
    configure_logging: Callable[[], None] | None = None,
) -> int:
    """Parse args, apply shared CLI setup, and execute command."""
    args = parse_args(argv)

    if args.history_file:
        args.history_file = args.history_file.resolve()

    if args.workdir:
        workdir = args.workdir.resolve()
        workdir.mkdir(parents=True, exist_ok=True)
        os.chdir(workdir)
        reset_paths()

    if configure_logging is not None:
        configure_logging()

    logger.info("Working directory: %s", Path.cwd())
    return dispatch(args)
