from .base import BaseViewModel
from .resource_list_viewmodel import OperationKind, ResourceListViewModel
from .signal import ObservableProperty, Signal

__all__ = [
    "BaseViewModel",
    "ObservableProperty",
    "OperationKind",
    "ResourceListViewModel",
    "Signal",
]
