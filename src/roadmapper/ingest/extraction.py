"""Recovery of a JSON payload from raw model output.

Models wrap their JSON in two common ways: a fenced code block, or prose
before and after a bare object. Extraction tries them in that order and never
attempts to repair a payload that fails to parse.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from roadmapper.ingest.errors import ExtractionFailure

logger = logging.getLogger(__name__)

NO_PAYLOAD_MESSAGE = "no JSON-like payload found"
MALFORMED_MESSAGE = "malformed JSON"

# Non-greedy so that two fenced sections never merge into one candidate.
FENCED_BLOCK_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]+?)\s*```", re.IGNORECASE)


def find_candidate(text: str) -> str | None:
    """Locate the JSON-shaped part of a model response.

    Returns:
        The candidate substring, or None when nothing looks like JSON.
    """
    stripped = text.strip()

    match = FENCED_BLOCK_PATTERN.search(stripped)
    if match and match.group(1):
        return match.group(1)

    first_brace = stripped.find("{")
    last_brace = stripped.rfind("}")
    if first_brace != -1 and last_brace > first_brace:
        return stripped[first_brace : last_brace + 1]

    return None


def extract_document(text: str) -> Any:
    """Extract and parse the JSON payload of a model response.

    Args:
        text: Full concatenated model output.

    Returns:
        The parsed JSON value (untrusted; see validation).

    Raises:
        ExtractionFailure: If no candidate exists or it fails to parse.
    """
    candidate = find_candidate(text)
    if candidate is None:
        logger.warning("No JSON candidate in %d chars of output", len(text))
        raise ExtractionFailure(NO_PAYLOAD_MESSAGE)

    try:
        return json.loads(candidate)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.error("Failed to parse extracted JSON text: %s", e)
        logger.debug("Rejected candidate: %s", candidate)
        raise ExtractionFailure(
            MALFORMED_MESSAGE, candidate=candidate, detail=str(e)
        ) from e
