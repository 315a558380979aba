"""Transport contract between the list engine and a remote resource."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class IResourceManager(ABC):
    """Remote collection of one resource type.

    Every method returns a :class:`~listsync.domain.models.core.Response` (or
    an equivalent ``{"status", "data"}`` mapping) and raises
    :class:`~listsync.errors.TransportError` when the call fails.
    """

    @abstractmethod
    def list(self, params: Optional[Dict[str, Any]] = None, ctx: Any = None):
        """Response data: ``{"data": [rows], "total": n, "limit": n, "offset": n}``"""
        pass

    @abstractmethod
    def get(self, id: Any, params: Optional[Dict[str, Any]] = None):
        """Response data: one row"""
        pass

    @abstractmethod
    def create(self, data: Optional[Dict[str, Any]] = None):
        pass

    @abstractmethod
    def update(self, id: Any, data: Optional[Dict[str, Any]] = None):
        pass

    @abstractmethod
    def batch_update(self, ids: List[Any], data: Optional[Dict[str, Any]] = None):
        """Response data: ``[{"id", "status", "data"}, ...]``"""
        pass

    @abstractmethod
    def perform_action(self, id: Any, action: str, data: Optional[Dict[str, Any]] = None):
        pass

    @abstractmethod
    def batch_perform_action(self, ids: List[Any], action: str, data: Optional[Dict[str, Any]] = None):
        """Response data: ``[{"id", "status", "data"}, ...]``"""
        pass

    @abstractmethod
    def delete(self, id: Any, data: Optional[Dict[str, Any]] = None):
        pass

    @abstractmethod
    def batch_delete(self, ids: List[Any], data: Optional[Dict[str, Any]] = None):
        pass
