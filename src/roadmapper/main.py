"""Entry point for the Roadmapper CLI."""

from __future__ import annotations

import logging
import os
import sys

from roadmapper.cli import run
from roadmapper.config.paths import get_paths
from roadmapper.config.settings import settings


def setup_logging() -> None:
    """Configure logging to file for debugging."""
    paths = get_paths()
    paths.workspace_config.mkdir(parents=True, exist_ok=True)
    log_file = paths.debug_log

    # Set level from env var, default to INFO
    level = os.environ.get("ROADMAPPER_LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, mode="w"),
        ],
    )
    logging.info("Roadmapper starting, logging to %s", log_file)
    logging.info(
        "LLM provider: %s (%s), history slot: %s",
        settings.llm_provider,
        settings.llm_model,
        settings.history_slot,
    )


def main() -> None:
    """Entry point for the Roadmapper application."""
    sys.exit(run(sys.argv[1:], configure_logging=setup_logging))


if __name__ == "__main__":
    main()
