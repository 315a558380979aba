from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("PySide6", reason="PySide6 is required for settings tests", exc_type=ImportError)

from listsync.errors import SettingsLoadError, SettingsValidationError
from listsync.settings import SettingsManager
from listsync.settings.schema import DEFAULT_SETTINGS, merge_with_defaults


def test_settings_manager_roundtrip(tmp_path: Path, qapp) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()
    assert settings_path.exists()
    assert manager.get("list.limit") is None

    changes = []
    manager.settingsChanged.connect(lambda key, value: changes.append((key, value)))
    manager.set("list.limit", 50)

    assert changes == [("list.limit", 50)]
    assert manager.get("list.limit") == 50
    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["list"]["limit"] == 50


def test_remembered_limit_survives_reload(tmp_path: Path, qapp) -> None:
    settings_path = tmp_path / "settings.json"
    first = SettingsManager(path=settings_path)
    first.load()
    first.set("list.limit", 100)

    second = SettingsManager(path=settings_path)
    second.load()

    assert second.get("list.limit") == 100
    assert second.get("api.version") == DEFAULT_SETTINGS["api"]["version"]


def test_invalid_value_leaves_state_untouched(tmp_path: Path, qapp) -> None:
    settings_path = tmp_path / "settings.json"
    manager = SettingsManager(path=settings_path)
    manager.load()
    manager.set("list.limit", 20)

    with pytest.raises(SettingsValidationError):
        manager.set("list.limit", 0)

    assert manager.get("list.limit") == 20
    assert json.loads(settings_path.read_text(encoding="utf-8"))["list"]["limit"] == 20


def test_corrupt_file_raises_load_error(tmp_path: Path, qapp) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        SettingsManager(path=settings_path).load()


def test_invalid_file_raises_validation_error(tmp_path: Path, qapp) -> None:
    settings_path = tmp_path / "settings.json"
    settings_path.write_text(json.dumps({"list": {"limit": "many"}}), encoding="utf-8")

    with pytest.raises(SettingsValidationError):
        SettingsManager(path=settings_path).load()


def test_get_missing_key_returns_default(tmp_path: Path, qapp) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()

    assert manager.get("list.columns", ["id"]) == ["id"]
    assert manager.get("nope.deeper", 3) == 3


def test_merge_with_defaults_keeps_unknown_sections() -> None:
    merged = merge_with_defaults({"list": {"limit": 10}, "ui": {"theme": "dark"}})

    assert merged["list"]["limit"] == 10
    assert merged["api"] == DEFAULT_SETTINGS["api"]
    assert merged["ui"] == {"theme": "dark"}


def test_page_size_accessors(tmp_path: Path, qapp) -> None:
    manager = SettingsManager(path=tmp_path / "settings.json")
    manager.load()

    assert manager.page_size(20) == 20
    manager.remember_page_size(75)
    assert manager.page_size(20) == 75
    assert manager.get("list.limit") == 75

    manager.reset("list.limit")
    assert manager.get("list.limit") is None
    assert manager.page_size(20) == 20
