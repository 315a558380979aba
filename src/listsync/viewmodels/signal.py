"""Pure Python signal system - no Qt dependency.

``Signal`` carries record and selection notifications out of the list
engine; ``ObservableProperty`` holds the engine's bindable state (records,
page, filter, selection, loading flag).
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator

_logger = logging.getLogger(__name__)


class Signal:
    """Ordered list of callbacks fired synchronously by :meth:`emit`.

    A handler that raises is logged and skipped; the remaining handlers
    still run, so one broken view cannot stall polling.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []
        self._lock = threading.Lock()

    def connect(self, handler: Callable) -> None:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

    def disconnect(self, handler: Callable) -> None:
        with self._lock:
            self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            handlers = tuple(self._handlers)
        for handler in handlers:
            try:
                handler(*args, **kwargs)
            except Exception:
                _logger.exception("Signal handler %r failed", handler)

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)


class ObservableProperty:
    """Bindable value emitting ``changed(new_value, old_value)``.

    Assigning an equal value is silent.  Containers such as the records
    mapping are edited in place inside :meth:`mutate`, which always
    notifies once the block exits.
    """

    def __init__(self, initial_value: Any = None) -> None:
        self._value = initial_value
        self.changed = Signal()

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        if self._value == new_value:
            return
        old_value, self._value = self._value, new_value
        self.changed.emit(new_value, old_value)

    @contextmanager
    def mutate(self) -> Iterator[Any]:
        """Yield the current value for in-place edits, then notify."""
        yield self._value
        self.notify()

    def notify(self) -> None:
        self.changed.emit(self._value, self._value)
