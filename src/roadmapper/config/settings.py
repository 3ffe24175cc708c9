"""Configuration and settings persistence."""

import json
import logging
from pathlib import Path
from typing import Any

from roadmapper.config.paths import get_paths

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SLOT = "impact_roadmaps_history"

PROVIDERS = ("anthropic", "openai")

DEFAULT_MODELS: dict[str, str] = {
    "anthropic": "claude-sonnet-4-5",
    "openai": "gpt-4o",
}


def get_settings_path() -> Path:
    """Get the path to the settings file."""
    return get_paths().global_settings


class Settings:
    """Persistent settings for Roadmapper."""

    _defaults: dict[str, Any] = {
        "history_slot": DEFAULT_HISTORY_SLOT,
    }

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load settings from disk."""
        path = get_settings_path()
        if path.exists():
            try:
                self._data = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError):
                self._data = {}
        else:
            self._data = {}
        if not isinstance(self._data, dict):
            self._data = {}

    def _save(self) -> None:
        """Save settings to disk."""
        path = get_settings_path()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
            logger.info("Saved settings to %s: %s", path, self._data)
        except OSError as e:
            logger.error("Failed to save settings: %s", e)

    def get(self, key: str) -> Any:
        """Get a setting value, falling back to default."""
        return self._data.get(key, self._defaults.get(key))

    def set(self, key: str, value: Any) -> None:
        """Set a setting value and persist to disk."""
        self._data[key] = value
        self._save()

    # --- Storage Settings ---

    @property
    def history_slot(self) -> str:
        """Name of the storage slot holding saved roadmaps."""
        value = self._data.get("history_slot")
        if isinstance(value, str) and value.strip():
            return value.strip()
        return DEFAULT_HISTORY_SLOT

    @history_slot.setter
    def history_slot(self, value: str) -> None:
        self.set("history_slot", value)

    @property
    def data_directory(self) -> Path:
        """Get the directory holding storage slots.

        Returns the configured data directory, or defaults to the
        XDG data directory.
        """
        saved = self._data.get("data_directory")
        if saved:
            return Path(saved).expanduser().resolve()
        return get_paths().global_data_dir

    @data_directory.setter
    def data_directory(self, value: str | Path) -> None:
        """Set the data directory."""
        self.set("data_directory", str(value))

    # --- LLM Provider Settings ---

    def _get_llm_settings(self) -> dict[str, Any]:
        llm = self._data.get("llm", {})
        return llm if isinstance(llm, dict) else {}

    def _set_llm_value(self, key: str, value: Any) -> None:
        llm = self._get_llm_settings()
        llm[key] = value
        self.set("llm", llm)

    @property
    def llm_provider(self) -> str:
        """Get the LLM provider name ('anthropic' or 'openai')."""
        provider = str(self._get_llm_settings().get("provider", "anthropic"))
        return provider if provider in PROVIDERS else "anthropic"

    @llm_provider.setter
    def llm_provider(self, value: str) -> None:
        """Set the LLM provider."""
        self._set_llm_value("provider", value)

    @property
    def llm_model(self) -> str:
        """Get the LLM model name.

        Returns the configured model, or a default based on the provider.
        """
        llm = self._get_llm_settings()
        if llm.get("model"):
            return str(llm["model"])
        return DEFAULT_MODELS[self.llm_provider]

    @llm_model.setter
    def llm_model(self, value: str) -> None:
        """Set the LLM model name."""
        self._set_llm_value("model", value)

    @property
    def llm_temperature(self) -> float:
        """Sampling temperature for roadmap generation."""
        raw_value = self._get_llm_settings().get("temperature", 0.5)
        try:
            value = float(raw_value)
        except (TypeError, ValueError):
            return 0.5
        if value < 0 or value > 2:
            return 0.5
        return value

    @llm_temperature.setter
    def llm_temperature(self, value: float) -> None:
        self._set_llm_value("temperature", float(value))

    @property
    def llm_max_tokens(self) -> int:
        """Maximum tokens requested for a roadmap response."""
        raw_value = self._get_llm_settings().get("max_tokens", 8192)
        try:
            value = int(raw_value)
        except (TypeError, ValueError):
            return 8192
        return value if value > 0 else 8192

    @llm_max_tokens.setter
    def llm_max_tokens(self, value: int) -> None:
        self._set_llm_value("max_tokens", int(value))

    @property
    def llm_web_search(self) -> bool:
        """Whether the model may search the web to ground its roadmap."""
        return bool(self._get_llm_settings().get("web_search", True))

    @llm_web_search.setter
    def llm_web_search(self, value: bool) -> None:
        self._set_llm_value("web_search", bool(value))


# Global settings instance
settings = Settings()
