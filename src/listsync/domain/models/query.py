from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional


@dataclass(frozen=True)
class FilterOption:
    """Static description of one filter key.

    ``formatter`` transforms the user value before it is sent.  When
    ``filter`` is true the formatted value is appended to the generic
    ``filter`` expression list; otherwise it is sent as a named parameter.
    """

    formatter: Optional[Callable[[Any], Any]] = None
    filter: bool = False

    @classmethod
    def coerce(cls, value: Any) -> "FilterOption":
        if isinstance(value, FilterOption):
            return value
        if isinstance(value, dict):
            return cls(formatter=value.get("formatter"), filter=bool(value.get("filter", False)))
        raise TypeError(f"Unsupported filter option: {value!r}")


@dataclass
class ListQuery:
    """Request parameters for one list call - Fluent API."""

    scope: Optional[Any] = None
    limit: Optional[int] = None
    offset: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    def with_scope(self, scope: Any):
        self.scope = scope
        return self

    def with_params(self, params: Optional[Dict[str, Any]]):
        self.extra.update(params or {})
        return self

    def paginate(self, page: int, page_size: int):
        self.offset = (page - 1) * page_size
        self.limit = page_size
        return self

    def to_params(self) -> Dict[str, Any]:
        """Flatten into request parameters.  ``offset`` is only sent when non-zero."""
        params: Dict[str, Any] = {}
        if self.scope is not None:
            params["scope"] = self.scope
        params.update(self.extra)
        if self.limit:
            params["limit"] = self.limit
        if self.offset:
            params["offset"] = self.offset
        return params
