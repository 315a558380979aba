"""Steady-status predicate.

A steady-status specification maps a dotted field path of the resource data
to the value expected there, either a single value or a collection of
acceptable values::

    {"status": ["running", "ready"], "power.state": "on"}

A record is steady when every path matches, or as soon as any checked field
holds a value containing ``fail`` (case-insensitive).  Failed states are
terminal so a resource stuck in an error state is not polled forever.  The
fail override also masks non-matching fields that are not failures.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ...utils.fieldpath import get_path

FAIL_MARKER = "fail"

SteadyStatus = Dict[str, Any]

_COLLECTION_TYPES = (list, tuple, set, frozenset)


def normalize_steady_status(value: Any) -> Optional[SteadyStatus]:
    """Expand the shorthand forms into a field-path mapping.

    A string or a collection of strings is shorthand for ``{"status": value}``.
    ``None`` stays ``None``.
    """

    if value is None:
        return None
    if isinstance(value, str) or isinstance(value, _COLLECTION_TYPES):
        return {"status": value}
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError(f"Unsupported steady status specification: {value!r}")


def matches_fail_pattern(value: Any) -> bool:
    return isinstance(value, str) and FAIL_MARKER in value.lower()


def _matches_expected(current: Any, expected: Any) -> bool:
    if isinstance(expected, _COLLECTION_TYPES):
        try:
            return current in expected
        except TypeError:
            # unhashable value checked against a set
            return False
    return current == expected


def is_steady(data: Optional[Mapping[str, Any]], spec: Optional[Mapping[str, Any]]) -> bool:
    """Return ``True`` when *data* satisfies *spec* (see module docstring)."""

    if not spec:
        return True
    data = data or {}
    current_values = {path: get_path(data, path) for path in spec}
    if any(matches_fail_pattern(value) for value in current_values.values()):
        return True
    return all(
        _matches_expected(current_values[path], expected)
        for path, expected in spec.items()
    )
