"""Synchronous publish/subscribe bus for list engine notifications.

Several lists (one per resource) usually share a bus.  Subscribers can pass
``resource=`` to only receive events published for that resource; events
without a ``resource`` attribute always match.
"""

from __future__ import annotations

import logging
import threading
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type


@dataclass(kw_only=True)
class Event:
    """Base event class."""
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Subscription:
    """Handle returned by subscribe(); can be used to unsubscribe."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: Type = Event
    handler: Callable = field(default=lambda e: None)
    resource: Optional[str] = None
    active: bool = True

    def cancel(self):
        self.active = False

    def accepts(self, event: Event) -> bool:
        if not self.active:
            return False
        if self.resource is None:
            return True
        published_for = getattr(event, "resource", None)
        return published_for is None or published_for == self.resource


class EventBus:
    """Dispatches events to subscribers on the publishing thread.

    Handlers run in subscription order.  A failing handler is logged and does
    not stop the remaining handlers.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._handlers: Dict[Type[Event], List[Subscription]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(
        self,
        event_type: Type[Event],
        handler: Callable,
        resource: Optional[str] = None,
    ) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler, resource=resource)
        with self._lock:
            self._handlers[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription):
        subscription.cancel()
        with self._lock:
            subs = self._handlers.get(subscription.event_type, [])
            if subscription in subs:
                subs.remove(subscription)

    def subscriber_count(self, event_type: Type[Event]) -> int:
        with self._lock:
            return sum(1 for sub in self._handlers.get(event_type, []) if sub.active)

    def publish(self, event: Event) -> int:
        """Deliver *event*; returns how many handlers ran."""
        event_type = type(event)

        with self._lock:
            subs = [sub for sub in self._handlers[event_type] if sub.active]
            # drop cancelled subscriptions lazily
            self._handlers[event_type] = subs

        delivered = 0
        for sub in subs:
            if not sub.accepts(event):
                continue
            delivered += 1
            try:
                sub.handler(event)
            except Exception as e:
                self._logger.error(f"Handler failed for {event_type.__name__}: {e}")
        return delivered
