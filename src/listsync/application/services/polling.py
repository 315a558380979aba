"""Convergence polling of single records.

A :class:`PollingJob` re-fetches one resource every ``interval`` seconds
until its data satisfies the expected steady status.  There is no attempt
cap and no backoff: a job only stops when the record is steady, when the
fetch fails (a 404 counts as the record being gone), or when it is
cancelled.  Callers that need a wall-clock bound
should cancel jobs themselves.

:class:`PollRegistry` keeps at most one job per identity key.  Starting a
poll for a key that is already polling re-arms the existing job, which
cancels its pending timer first.
"""

from __future__ import annotations

import functools
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

from ...domain.services.steady_status import is_steady
from ...errors import ResourceNotFoundError, TransportError

_LOGGER = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Runs *callback* once after *delay* seconds on the caller's event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


def _is_gone(error: Exception) -> bool:
    return isinstance(error, ResourceNotFoundError) or (
        isinstance(error, TransportError) and error.status == 404
    )


class PollState(Enum):
    IDLE = "idle"
    SCHEDULED = "scheduled"
    FETCHING = "fetching"


FetchOne = Callable[[Any], Mapping[str, Any]]
KeyCallback = Callable[[Any], None]
DataCallback = Callable[[Any, Mapping[str, Any]], None]
ErrorCallback = Callable[[Any, Exception], None]


class PollingJob:
    def __init__(
        self,
        key: Any,
        *,
        fetch: FetchOne,
        on_data: DataCallback,
        on_gone: KeyCallback,
        on_error: ErrorCallback,
        scheduler: Scheduler,
        interval: float,
        on_settled: Optional[DataCallback] = None,
        predicate: Callable[[Any, Any], bool] = is_steady,
    ) -> None:
        self.key = key
        self._fetch = fetch
        self._on_data = on_data
        self._on_gone = on_gone
        self._on_error = on_error
        self._on_settled = on_settled
        self._scheduler = scheduler
        self._interval = interval
        self._predicate = predicate

        self._expected: Optional[Dict[str, Any]] = None
        self._timer: Optional[TimerHandle] = None
        self._state = PollState.IDLE
        # Bumped on every start/cancel; a timer or fetch from an older
        # generation must not touch the record.
        self._generation = 0

    @property
    def state(self) -> PollState:
        return self._state

    @property
    def expected(self) -> Optional[Dict[str, Any]]:
        return self._expected

    @property
    def active(self) -> bool:
        return self._state is not PollState.IDLE

    def start(self, expected: Optional[Mapping[str, Any]]) -> None:
        """Arm the timer, replacing any pending one."""
        self._clear_timer()
        self._generation += 1
        self._expected = dict(expected) if expected else None
        self._timer = self._scheduler.call_later(
            self._interval, functools.partial(self._fire, self._generation)
        )
        self._state = PollState.SCHEDULED

    def cancel(self) -> None:
        self._generation += 1
        self._clear_timer()
        self._state = PollState.IDLE

    # ------------------------------------------------------------------
    def _clear_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._timer = None
        self._state = PollState.FETCHING
        try:
            data = self._fetch(self.key)
        except Exception as exc:
            if generation != self._generation:
                return
            self._state = PollState.IDLE
            if _is_gone(exc):
                _LOGGER.info("Polled resource %r is gone", self.key)
                self._on_gone(self.key)
            else:
                _LOGGER.warning("Polling %r stopped after error: %s", self.key, exc)
                self._on_error(self.key, exc)
            return

        if generation != self._generation:
            _LOGGER.debug("Discarding poll result for %r from a cancelled job", self.key)
            return
        data = data or {}
        self._on_data(self.key, data)
        if generation != self._generation:
            return
        if self._predicate(data, self._expected):
            self._state = PollState.IDLE
            _LOGGER.debug("Record %r reached steady status", self.key)
            if self._on_settled is not None:
                self._on_settled(self.key, data)
        else:
            self.start(self._expected)


class PollRegistry:
    """Owns the polling jobs of one collection, keyed by identity key."""

    def __init__(
        self,
        *,
        fetch: FetchOne,
        on_data: DataCallback,
        on_gone: KeyCallback,
        on_error: ErrorCallback,
        scheduler: Scheduler,
        interval: float,
        on_settled: Optional[DataCallback] = None,
    ) -> None:
        self._job_factory = functools.partial(
            PollingJob,
            fetch=fetch,
            on_data=on_data,
            on_gone=on_gone,
            on_error=on_error,
            on_settled=on_settled,
            scheduler=scheduler,
            interval=interval,
        )
        self._jobs: Dict[Any, PollingJob] = {}

    def start(self, key: Any, expected: Optional[Mapping[str, Any]]) -> PollingJob:
        job = self._jobs.get(key)
        if job is None:
            job = self._job_factory(key)
            self._jobs[key] = job
        job.start(expected)
        return job

    def cancel(self, key: Any) -> None:
        job = self._jobs.pop(key, None)
        if job is not None:
            job.cancel()

    def cancel_all(self) -> None:
        jobs = list(self._jobs.values())
        self._jobs.clear()
        for job in jobs:
            job.cancel()

    def get(self, key: Any) -> Optional[PollingJob]:
        return self._jobs.get(key)

    def is_active(self, key: Any) -> bool:
        job = self._jobs.get(key)
        return job is not None and job.active

    def active_keys(self) -> List[Any]:
        return [key for key, job in self._jobs.items() if job.active]


__all__ = ["PollRegistry", "PollState", "PollingJob", "Scheduler", "TimerHandle"]
