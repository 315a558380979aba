"""Custom exception hierarchy for listsync."""

from __future__ import annotations

from typing import Any, Optional


class ListSyncError(Exception):
    """Base class for all custom errors raised by listsync."""


# --- 3-layer hierarchy ---

class DomainError(ListSyncError):
    """Base class for domain-level errors."""


class InfrastructureError(ListSyncError):
    """Base class for infrastructure-level errors."""


class ApplicationError(ListSyncError):
    """Base class for application-level errors."""


# --- Domain errors ---

class RecordNotFoundError(DomainError):
    """Raised when an identity key has no record in the local mirror."""


# --- Infrastructure errors ---

class TransportError(InfrastructureError):
    """Raised when a call to the remote resource fails.

    ``status`` is the HTTP status code, or ``None`` when the request never
    produced a response (connection refused, timeout, ...).
    """

    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload


class ResourceNotFoundError(TransportError):
    """Raised when the remote resource answers 404."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message, status=404, payload=payload)


# --- Application errors ---

class OperationArgumentError(ApplicationError):
    """Raised when an operation is called with missing or malformed arguments."""


class UnknownFilterError(ApplicationError):
    """Raised when a filter key is used without a declared filter option."""


class OperationFailedError(ApplicationError):
    """Per-item failure reported inside an operation response envelope."""

    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload


# --- Settings errors ---

class SettingsError(ListSyncError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


# --- DI-specific errors ---

class CircularDependencyError(ListSyncError):
    """Raised when a circular dependency is detected during resolution."""


class ResolutionError(ListSyncError):
    """Raised when a dependency cannot be resolved."""
