from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .bus import Event


@dataclass(kw_only=True)
class PageFetchedEvent(Event):
    resource: str = ""
    offset: int = 0
    limit: int = 0
    total: int = 0
    ids: List[Any] = field(default_factory=list)


@dataclass(kw_only=True)
class RecordPatchedEvent(Event):
    resource: str = ""
    record_id: Any = None
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(kw_only=True)
class RecordErrorEvent(Event):
    resource: str = ""
    record_id: Any = None
    error: Optional[Exception] = None


@dataclass(kw_only=True)
class PollSettledEvent(Event):
    resource: str = ""
    record_id: Any = None
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(kw_only=True)
class ResourceGoneEvent(Event):
    resource: str = ""
    record_id: Any = None
