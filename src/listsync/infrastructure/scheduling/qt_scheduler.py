"""Single-shot timers on the Qt event loop."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Set

from PySide6.QtCore import QObject, QTimer

_LOGGER = logging.getLogger(__name__)


class _QtTimerHandle:
    def __init__(self, owner: "QtTimerScheduler", timer: QTimer, callback: Callable[[], None]) -> None:
        self._owner = owner
        self._timer: Optional[QTimer] = timer
        self._callback = callback
        timer.timeout.connect(self._on_timeout)

    @property
    def active(self) -> bool:
        return self._timer is not None

    def cancel(self) -> None:
        timer = self._release()
        if timer is not None:
            timer.stop()

    def _release(self) -> Optional[QTimer]:
        timer, self._timer = self._timer, None
        if timer is not None:
            self._owner._pending.discard(self)
            timer.deleteLater()
        return timer

    def _on_timeout(self) -> None:
        if self._release() is None:
            return
        self._callback()


class QtTimerScheduler:
    """Scheduler backed by single-shot ``QTimer`` objects.

    Callbacks run on the thread that owns the Qt event loop, one at a time,
    which gives the list engine its cooperative single-threaded model.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        self._parent = parent
        self._pending: Set[_QtTimerHandle] = set()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.setInterval(max(0, int(round(delay * 1000))))
        handle = _QtTimerHandle(self, timer, callback)
        self._pending.add(handle)
        timer.start()
        return handle

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def cancel_all(self) -> None:
        for handle in list(self._pending):
            handle.cancel()


__all__ = ["QtTimerScheduler"]
