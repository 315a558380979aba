"""Central reporting of list engine failures.

Errors that cannot be raised to a caller (poll failures, refreshes triggered
from a timer) are routed here.  The handler logs them with their record
context, republishes them on the :class:`EventBus` and forwards the serious
ones to an optional UI callback.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from listsync.errors import (
    ListSyncError,
    OperationFailedError,
    ResourceNotFoundError,
    SettingsError,
    TransportError,
)
from listsync.events.bus import Event, EventBus


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


def severity_for(error: Exception) -> ErrorSeverity:
    """Default severity of *error* when the caller does not pick one."""

    if isinstance(error, ResourceNotFoundError):
        # a record disappearing underneath a poll is routine
        return ErrorSeverity.INFO
    if isinstance(error, OperationFailedError):
        return ErrorSeverity.WARNING
    if isinstance(error, (TransportError, SettingsError)):
        return ErrorSeverity.ERROR
    if isinstance(error, ListSyncError):
        return ErrorSeverity.WARNING
    return ErrorSeverity.CRITICAL


def describe(error: Exception, context: Optional[Dict[str, Any]] = None) -> str:
    """One-line description naming the affected record and HTTP status."""

    context = context or {}
    parts = []
    resource = context.get("resource")
    record_id = context.get("record_id")
    if resource and record_id is not None:
        parts.append(f"{resource}/{record_id}")
    elif record_id is not None:
        parts.append(str(record_id))
    elif resource:
        parts.append(str(resource))
    status = getattr(error, "status", None)
    label = error.__class__.__name__ if status is None else f"{error.__class__.__name__} [{status}]"
    message = f"{label}: {error}"
    return f"{parts[0]}: {message}" if parts else message


class ErrorHandler:
    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]):
        self._ui_callback = callback

    def handle(
        self,
        error: Exception,
        severity: Optional[ErrorSeverity] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorSeverity:
        severity = severity or severity_for(error)
        context = dict(context or {})
        log_method = getattr(self._logger, severity.value, self._logger.error)
        log_method(describe(error, context), extra={"listsync_context": context})

        self._events.publish(ErrorOccurredEvent(error=error, severity=severity, context=context))

        if self._ui_callback and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(str(error), severity)
        return severity
