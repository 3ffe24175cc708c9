from __future__ import annotations

import importlib
from pathlib import Path

import pytest

from roadmapper.config.settings import DEFAULT_HISTORY_SLOT, DEFAULT_MODELS, settings


def test_settings_do_not_write_to_disk(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    settings_path = tmp_path / "settings.json"
    settings_module = importlib.import_module("roadmapper.config.settings")
    monkeypatch.setattr(settings_module, "get_settings_path", lambda: settings_path)

    settings.data_directory = tmp_path

    assert settings.get("data_directory") == str(tmp_path)
    assert settings.data_directory == tmp_path.resolve()
    assert not settings_path.exists()


def test_history_slot_defaults() -> None:
    settings._data.pop("history_slot", None)
    assert settings.history_slot == DEFAULT_HISTORY_SLOT

    settings._data["history_slot"] = "   "
    assert settings.history_slot == DEFAULT_HISTORY_SLOT

    settings.history_slot = "work_roadmaps"
    assert settings.history_slot == "work_roadmaps"


def test_model_follows_provider() -> None:
    settings._data["llm"] = {"provider": "openai"}
    assert settings.llm_provider == "openai"
    assert settings.llm_model == DEFAULT_MODELS["openai"]

    settings._data["llm"] = {"provider": "nonsense"}
    assert settings.llm_provider == "anthropic"


def test_llm_invalid_values_fall_back() -> None:
    settings._data["llm"] = {
        "temperature": "hot",
        "max_tokens": -5,
    }
    assert settings.llm_temperature == 0.5
    assert settings.llm_max_tokens == 8192

    settings._data["llm"] = {"temperature": 7}
    assert settings.llm_temperature == 0.5


def test_llm_round_trip() -> None:
    settings._data["llm"] = {}
    settings.llm_temperature = 1.2
    settings.llm_max_tokens = 2048
    settings.llm_web_search = False

    assert settings.llm_temperature == pytest.approx(1.2)
    assert settings.llm_max_tokens == 2048
    assert settings.llm_web_search is False
