"""Translate user filter values into list request parameters."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ...domain.models.query import FilterOption
from ...errors import UnknownFilterError


def compile_filter_params(
    params: Optional[Mapping[str, Any]],
    filter_values: Optional[Mapping[str, Any]],
    filter_options: Optional[Mapping[str, Any]],
) -> Dict[str, Any]:
    """Return the parameters contributed by the active filters.

    Values for options flagged ``filter`` are collected, together with any
    ``filter`` expression already present in *params*, into a single
    ``filter`` list.  Other options become named parameters.  Keys whose value
    is ``None`` are inactive and skipped.
    """

    ret: Dict[str, Any] = {}
    filters: List[Any] = []
    base = (params or {}).get("filter")
    if isinstance(base, (list, tuple)):
        filters.extend(base)
    elif base is not None:
        filters.append(base)

    options = filter_options or {}
    for key, value in (filter_values or {}).items():
        if value is None:
            continue
        if key not in options:
            raise UnknownFilterError(f"No filter option declared for {key!r}")
        option = FilterOption.coerce(options[key])
        if option.formatter is not None:
            value = option.formatter(value)
        if option.filter:
            filters.append(value)
        else:
            ret[key] = value

    if filters:
        ret["filter"] = filters
    return ret


__all__ = ["compile_filter_params"]
