"""Schema helpers for the listsync settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_API_VERSION

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "listsync/settings.schema.json",
    "type": "object",
    "required": ["schema", "list", "api"],
    "properties": {
        "schema": {"const": "listsync/settings@1"},
        "list": {
            "type": "object",
            "properties": {
                "limit": {"type": ["integer", "null"], "minimum": 1},
            },
            "additionalProperties": True,
        },
        "api": {
            "type": "object",
            "properties": {
                "base_url": {"type": ["string", "null"]},
                "version": {"type": "string", "minLength": 1},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "listsync/settings@1",
    "list": {
        "limit": None,
    },
    "api": {
        "base_url": None,
        "version": DEFAULT_API_VERSION,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_SECTIONS = ("list", "api")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
