from .bus import Event, EventBus, Subscription
from .list_events import (
    PageFetchedEvent,
    PollSettledEvent,
    RecordErrorEvent,
    RecordPatchedEvent,
    ResourceGoneEvent,
)

__all__ = [
    "Event",
    "EventBus",
    "PageFetchedEvent",
    "PollSettledEvent",
    "RecordErrorEvent",
    "RecordPatchedEvent",
    "ResourceGoneEvent",
    "Subscription",
]
