from __future__ import annotations

import copy
from collections.abc import Iterator
from typing import Any

import pytest

from roadmapper.config.paths import reset_paths
from roadmapper.config.settings import settings


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Prevent tests from persisting settings to disk."""
    original_data = copy.deepcopy(settings._data)

    def _noop_save() -> None:
        return None

    monkeypatch.setattr(settings, "_save", _noop_save)
    try:
        yield
    finally:
        settings._data = original_data
        reset_paths()


@pytest.fixture
def roadmap_payload() -> dict[str, Any]:
    """A well-formed model payload with three connected nodes."""
    return {
        "title": "Learn Rust",
        "description": "From zero to a shipped crate.",
        "nodes": [
            {
                "id": "basics",
                "title": "Basics",
                "content": "Read *The Book*.",
                "references": ["https://doc.rust-lang.org/book/"],
                "connections": ["ownership"],
            },
            {
                "id": "ownership",
                "title": "Ownership",
                "content": "Borrowing and lifetimes.",
                "references": [],
                "connections": ["project"],
            },
            {
                "id": "project",
                "title": "Project",
                "content": "Publish a crate.",
                "references": [],
                "connections": [],
            },
        ],
        "sources": [{"uri": "https://www.rust-lang.org", "title": "Rust"}],
    }
