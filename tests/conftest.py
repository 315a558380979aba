from __future__ import annotations

import os
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import pytest

from listsync.domain.models.core import Response
from listsync.domain.repositories import IResourceManager


class ManualTimer:
    def __init__(self, scheduler: "ManualScheduler", delay: float, callback: Callable[[], None]) -> None:
        self._scheduler = scheduler
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler whose timers only fire when the test says so."""

    def __init__(self) -> None:
        self.timers: List[ManualTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self, delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[ManualTimer]:
        return [timer for timer in self.timers if not timer.cancelled and not timer.fired]

    def run_pending(self) -> int:
        """Fire every timer that is pending right now; returns how many fired."""
        due = self.pending
        for timer in due:
            if timer.cancelled or timer.fired:
                continue
            timer.fired = True
            timer.callback()
        return len(due)

    def run_until_idle(self, max_rounds: int = 50) -> int:
        rounds = 0
        while self.pending and rounds < max_rounds:
            self.run_pending()
            rounds += 1
        return rounds


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


def make_manager(rows: Optional[List[Dict[str, Any]]] = None, total: Optional[int] = None) -> Mock:
    """A transport double whose ``list`` answers with *rows*."""

    manager = Mock(spec=IResourceManager)
    manager.resource = "servers"
    rows = rows if rows is not None else []
    payload: Dict[str, Any] = {"data": rows}
    if total is not None:
        payload["total"] = total
    manager.list.return_value = Response(data=payload)
    return manager


@pytest.fixture
def manager() -> Mock:
    return make_manager(
        [
            {"id": "a", "name": "alpha", "status": "running"},
            {"id": "b", "name": "beta", "status": "running"},
        ],
        total=2,
    )


class FakeSettings:
    """In-memory stand-in for :class:`SettingsManager` with the same get/set surface."""

    def __init__(self, values: Optional[Dict[str, Any]] = None) -> None:
        self.values = dict(values or {})
        self.set_calls: List[tuple] = []

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.set_calls.append((key, value))
        self.values[key] = value


@pytest.fixture
def settings() -> FakeSettings:
    return FakeSettings()


@pytest.fixture(scope="session")
def qapp():
    pytest.importorskip("PySide6", reason="PySide6 is required for Qt tests", exc_type=ImportError)
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture(name="make_manager")
def make_manager_fixture() -> Callable[..., Mock]:
    return make_manager
