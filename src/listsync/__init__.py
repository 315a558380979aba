"""listsync: keep a local mirror of a paginated remote resource list in sync."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
