"""Centralized path management for Roadmapper.

Follows XDG Base Directory Specification:
- Config: $XDG_CONFIG_HOME/roadmapper (default: ~/.config/roadmapper)
- Data: $XDG_DATA_HOME/roadmapper (default: ~/.local/share/roadmapper)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


def _xdg_config_home() -> Path:
    """Get XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def _xdg_data_home() -> Path:
    """Get XDG_DATA_HOME, defaulting to ~/.local/share."""
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


@dataclass
class RoadmapperPaths:
    """Centralized path management following XDG spec."""

    workspace: Path  # Current working directory

    # XDG directories (computed once at init)
    _config_home: Path = field(default_factory=_xdg_config_home)
    _data_home: Path = field(default_factory=_xdg_data_home)

    # === WORKSPACE PATHS ===

    @property
    def workspace_config(self) -> Path:
        """Workspace .roadmapper/ directory."""
        return self.workspace / ".roadmapper"

    @property
    def debug_log(self) -> Path:
        """Debug log: .roadmapper/debug.log"""
        return self.workspace_config / "debug.log"

    # === GLOBAL PATHS (XDG compliant) ===

    @property
    def global_config_dir(self) -> Path:
        """Global config: ~/.config/roadmapper/"""
        return self._config_home / "roadmapper"

    @property
    def global_settings(self) -> Path:
        """Global settings file: ~/.config/roadmapper/settings.json"""
        return self.global_config_dir / "settings.json"

    @property
    def global_data_dir(self) -> Path:
        """Global data: ~/.local/share/roadmapper/"""
        return self._data_home / "roadmapper"

    def slot_file(self, slot_name: str, data_dir: Path | None = None) -> Path:
        """Get the JSON file backing a named storage slot."""
        return (data_dir or self.global_data_dir) / f"{slot_name}.json"


# Singleton instance
_paths: RoadmapperPaths | None = None


def get_paths(workspace: Path | None = None) -> RoadmapperPaths:
    """Get the paths singleton.

    On first call, optionally set the workspace directory.
    Subsequent calls return the same instance.

    Args:
        workspace: The workspace directory. If not provided on first call,
                   defaults to current working directory.

    Returns:
        The RoadmapperPaths singleton instance.
    """
    global _paths
    if _paths is None:
        _paths = RoadmapperPaths(workspace=workspace or Path.cwd())
    return _paths


def reset_paths() -> None:
    """Reset paths singleton (for testing)."""
    global _paths
    _paths = None
