"""Caller-owned cancellation tokens for list fetches."""

from __future__ import annotations

import threading


class CancellationToken:
    """Flag a caller invalidates when the context that issued a fetch goes away.

    The list engine checks the token after the transport returns and drops
    the result when it has been cancelled.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"


__all__ = ["CancellationToken"]
