"""Settings file management with validation and change notifications."""

from __future__ import annotations

import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema import ValidationError
from PySide6.QtCore import QObject, Signal

from ..errors import SettingsLoadError, SettingsValidationError
from ..config import LIST_LIMIT_SETTINGS_KEY
from ..utils.fieldpath import get_path
from ..utils.jsonio import read_json, write_json
from .schema import DEFAULT_SETTINGS, merge_with_defaults


def default_settings_path() -> Path:
    """Return the default settings.json location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "listsync" / "settings.json"
        return Path.home() / "AppData" / "Roaming" / "listsync" / "settings.json"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "listsync" / "settings.json"
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / "listsync" / "settings.json"
    return Path.home() / ".config" / "listsync" / "settings.json"


class SettingsManager(QObject):
    """Load, validate and persist user preferences such as the list page size."""

    settingsChanged = Signal(str, object)

    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self._path = path
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    @property
    def path(self) -> Path:
        return self._path or default_settings_path()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> None:
        """Load the settings JSON from disk, creating defaults if missing."""

        path = self.path
        self._path = path
        if path.exists():
            try:
                payload = read_json(path)
            except (OSError, ValueError) as exc:
                raise SettingsLoadError(str(exc)) from exc
        else:
            payload = None
        if payload is not None and not isinstance(payload, dict):
            raise SettingsLoadError(f"{path} does not contain a JSON object")
        try:
            self._data = merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        return get_path(self._data, key, default)

    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value* and persist the change.

        The update is validated before anything is written; an invalid value
        leaves both memory and disk untouched.
        """

        if isinstance(value, Path):
            value = str(value)

        candidate = deepcopy(self._data)
        parts = key.split(".")
        target: dict[str, Any] = candidate
        for part in parts[:-1]:
            branch = target.get(part)
            if not isinstance(branch, dict):
                branch = {}
                target[part] = branch
            target = branch
        target[parts[-1]] = value
        try:
            self._data = merge_with_defaults(candidate)
        except ValidationError as exc:
            raise SettingsValidationError(exc.message) from exc
        self._write()
        self.settingsChanged.emit(key, value)

    def reset(self, key: str) -> None:
        """Restore *key* to its shipped default."""

        self.set(key, get_path(DEFAULT_SETTINGS, key))

    # ------------------------------------------------------------------
    # List preferences
    # ------------------------------------------------------------------
    def page_size(self, default: int) -> int:
        """Remembered list page size, or *default* when none is stored."""

        stored = self.get(LIST_LIMIT_SETTINGS_KEY)
        return stored if isinstance(stored, int) and stored > 0 else default

    def remember_page_size(self, size: int) -> None:
        self.set(LIST_LIMIT_SETTINGS_KEY, int(size))

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _write(self) -> None:
        path = self.path
        self._path = path
        write_json(path, self._data)


__all__ = ["SettingsManager", "default_settings_path"]
