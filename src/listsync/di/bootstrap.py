"""Wire the shared listsync services into a :class:`Container`."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..application.services.polling import Scheduler
from ..errors.handler import ErrorHandler
from ..events.bus import EventBus
from ..infrastructure.transport.http_manager import HttpManagerFactory
from ..settings.manager import SettingsManager
from ..utils.logging import get_logger
from .container import Container


def bootstrap(
    container: Container,
    *,
    settings_path: Optional[Path] = None,
    base_url: Optional[str] = None,
    token: Optional[str] = None,
    scheduler: Optional[Scheduler] = None,
) -> Container:
    """Register all shared services in the DI container."""

    container.register_singleton(EventBus, EventBus)

    def _settings(_: Container) -> SettingsManager:
        manager = SettingsManager(path=settings_path)
        manager.load()
        return manager

    container.register_factory(SettingsManager, _settings, singleton=True)
    container.register_factory(
        ErrorHandler,
        lambda c: ErrorHandler(get_logger("errors"), c.resolve(EventBus)),
        singleton=True,
    )

    if scheduler is not None:
        container.register_instance(Scheduler, scheduler)
    else:
        def _scheduler(_: Container) -> Scheduler:
            from ..infrastructure.scheduling.qt_scheduler import QtTimerScheduler

            return QtTimerScheduler()

        container.register_factory(Scheduler, _scheduler, singleton=True)

    container.register_factory(
        HttpManagerFactory,
        lambda c: HttpManagerFactory(
            base_url=base_url or c.resolve(SettingsManager).get("api.base_url"),
            token=token,
        ),
        singleton=True,
    )
    return container
