"""Dotted field-path lookup into nested resource data."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

_MISSING = object()


def get_path(data: Any, path: str, default: Any = None) -> Any:
    """Return the value at *path* inside *data*.

    ``path`` uses dots for mapping keys and integer segments for sequence
    indices (``"nics.0.ip"``).  Missing segments yield *default*.
    """

    if not path:
        return default
    target = data
    for part in path.split("."):
        if isinstance(target, Mapping):
            target = target.get(part, _MISSING)
        elif isinstance(target, Sequence) and not isinstance(target, (str, bytes)):
            try:
                target = target[int(part)]
            except (ValueError, IndexError):
                target = _MISSING
        else:
            target = _MISSING
        if target is _MISSING:
            return default
    return target


__all__ = ["get_path"]
