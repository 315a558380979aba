"""BaseViewModel - pure Python, no Qt dependency.

Owns the optional :class:`EventBus` of a list engine.  Subscriptions made
through :meth:`subscribe_event` are cancelled by :meth:`dispose`, and
:meth:`publish` goes quiet once the model has been torn down.
"""

from __future__ import annotations

from typing import Callable, Optional, Type

from listsync.events.bus import Event, EventBus, Subscription


class BaseViewModel:
    def __init__(self, event_bus: Optional[EventBus] = None) -> None:
        self._event_bus = event_bus
        self._subscriptions: list[Subscription] = []
        self._disposed = False

    @property
    def event_bus(self) -> Optional[EventBus]:
        return self._event_bus

    @property
    def disposed(self) -> bool:
        return self._disposed

    def publish(self, event: Event) -> int:
        """Publish *event* on the model's bus; returns the handlers reached."""
        if self._event_bus is None or self._disposed:
            return 0
        return self._event_bus.publish(event)

    def subscribe_event(
        self,
        event_bus: Optional[EventBus],
        event_type: Type,
        handler: Callable,
        resource: Optional[str] = None,
    ) -> Subscription:
        """Subscribe on *event_bus* (or the model's own bus) and track it."""
        bus = event_bus or self._event_bus
        if bus is None:
            raise ValueError(f"No event bus to subscribe {event_type.__name__} on")
        sub = bus.subscribe(event_type, handler, resource=resource)
        self._subscriptions.append(sub)
        return sub

    def dispose(self) -> None:
        for sub in self._subscriptions:
            sub.cancel()
        self._subscriptions.clear()
        self._disposed = True
