"""Configuration management for Roadmapper."""
from __future__ import annotations

from roadmapper.config.paths import RoadmapperPaths, get_paths, reset_paths
from roadmapper.config.settings import Settings, get_settings_path, settings

__all__ = [
    "RoadmapperPaths",
    "Settings",
    "get_paths",
    "get_settings_path",
    "reset_paths",
    "settings",
]
