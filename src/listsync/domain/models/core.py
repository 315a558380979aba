from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ...config import ERROR_STATUS_THRESHOLD


@dataclass
class ItemRecord:
    """One resource in the local mirror.

    ``data`` is replaced wholesale on every successful fetch or update; it is
    never merged.  ``ordinal_index`` is the row position in the page the
    record came from and is ``None`` for records created by a patch.
    """

    id: Any
    data: Dict[str, Any]
    ordinal_index: Optional[int] = None
    last_error: Optional[Exception] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any], id_key: str, index: Optional[int] = None) -> ItemRecord:
        return cls(id=row.get(id_key), data=dict(row), ordinal_index=index)

    def replace_data(self, data: Mapping[str, Any]) -> None:
        self.data = dict(data)

    def set_error(self, error: Optional[Exception]) -> None:
        self.last_error = error


@dataclass
class PageState:
    offset: int = 0
    limit: int = 0
    total: int = 0

    @property
    def current_page(self) -> int:
        if self.limit <= 0:
            return 1
        return self.offset // self.limit + 1

    @property
    def total_pages(self) -> int:
        if self.limit <= 0 or self.total <= 0:
            return 0
        return (self.total + self.limit - 1) // self.limit


@dataclass
class Response:
    """Envelope returned by every transport call."""

    status: int = 200
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.status < ERROR_STATUS_THRESHOLD

    @classmethod
    def coerce(cls, value: Any) -> Response:
        """Accept a ``Response`` or a ``{"status": ..., "data": ...}`` mapping."""
        if isinstance(value, Response):
            return value
        if isinstance(value, Mapping):
            return cls(status=int(value.get("status", 200)), data=value.get("data"))
        if value is None:
            return cls(data=None)
        raise TypeError(f"Unsupported response envelope: {type(value).__name__}")


@dataclass
class BatchResult:
    """Outcome for one id inside a batched response."""

    id: Any
    status: int = 200
    data: Any = field(default=None)

    @property
    def ok(self) -> bool:
        return self.status < ERROR_STATUS_THRESHOLD

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> BatchResult:
        return cls(
            id=payload.get("id"),
            status=int(payload.get("status", 200)),
            data=payload.get("data"),
        )
