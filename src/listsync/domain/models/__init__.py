from .core import BatchResult, ItemRecord, PageState, Response
from .query import FilterOption, ListQuery

__all__ = [
    "BatchResult",
    "FilterOption",
    "ItemRecord",
    "ListQuery",
    "PageState",
    "Response",
]
