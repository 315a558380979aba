"""Resource list ViewModel - the list synchronisation engine.

Keeps a local mirror of one page of a remote collection, keyed by identity:

* ``fetch`` / ``refresh`` / ``change_page`` / ``change_page_size`` /
  ``change_filter`` replace the page wholesale.
* ``single_operate`` / ``batch_operate`` call the transport, patch the
  affected records from the response and, when a steady status is given,
  poll each affected record until it converges.
* Records whose data is not steady after a fetch are polled as well.

All work happens on the caller's thread.  Timers come from the injected
scheduler (Qt event loop by default).  A fetch that returns after a newer
fetch was issued, after ``dispose()``, or after its cancellation token was
cancelled is dropped without touching any state.
"""

from __future__ import annotations

import logging
from enum import Enum
from collections.abc import Hashable
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from ..application.cancellation import CancellationToken
from ..application.services.filter_compiler import compile_filter_params
from ..application.services.polling import PollRegistry, Scheduler
from ..config import (
    DEFAULT_API_VERSION,
    DEFAULT_ID_KEY,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REFRESH_INTERVAL_SEC,
    LIST_LIMIT_SETTINGS_KEY,
    REFRESH_OPERATIONS,
)
from ..domain.models.core import BatchResult, ItemRecord, PageState, Response
from ..domain.models.query import ListQuery
from ..domain.repositories import IResourceManager
from ..domain.services.steady_status import is_steady, normalize_steady_status
from ..errors import (
    OperationArgumentError,
    OperationFailedError,
    RecordNotFoundError,
    TransportError,
)
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events.bus import EventBus
from ..events.list_events import (
    PageFetchedEvent,
    PollSettledEvent,
    RecordErrorEvent,
    RecordPatchedEvent,
    ResourceGoneEvent,
)
from ..utils.logging import get_logger
from .base import BaseViewModel
from .signal import ObservableProperty, Signal

_LOGGER = get_logger(__name__)

FetchFn = Callable[[Dict[str, Any]], Any]
ManagerFactory = Callable[[str, str], IResourceManager]


class OperationKind(str, Enum):
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    PERFORM_ACTION = "perform_action"
    BATCH_UPDATE = "batch_update"
    BATCH_DELETE = "batch_delete"
    BATCH_PERFORM_ACTION = "batch_perform_action"

    @property
    def is_batch(self) -> bool:
        return self.value.startswith("batch_")


# Identity argument each transport method takes.
_ID_ARGUMENT: Dict[OperationKind, Optional[str]] = {
    OperationKind.GET: "id",
    OperationKind.CREATE: None,
    OperationKind.UPDATE: "id",
    OperationKind.DELETE: "id",
    OperationKind.PERFORM_ACTION: "id",
    OperationKind.BATCH_UPDATE: "ids",
    OperationKind.BATCH_DELETE: "ids",
    OperationKind.BATCH_PERFORM_ACTION: "ids",
}

_NEEDS_ACTION = frozenset({OperationKind.PERFORM_ACTION, OperationKind.BATCH_PERFORM_ACTION})

_SELECTION = object()


def _coerce_kind(kind: Union[str, OperationKind]) -> OperationKind:
    try:
        return OperationKind(kind)
    except ValueError:
        raise OperationArgumentError(f"Unknown operation {kind!r}") from None


def _batch_kind(kind: Union[str, OperationKind]) -> OperationKind:
    value = kind.value if isinstance(kind, OperationKind) else str(kind)
    if not value.startswith("batch_"):
        value = f"batch_{value}"
    return _coerce_kind(value)


class ResourceListViewModel(BaseViewModel):
    """Paginated, filterable, selectable mirror of a remote resource list."""

    def __init__(
        self,
        resource: Union[str, FetchFn, None] = None,
        *,
        fetch_fn: Optional[FetchFn] = None,
        manager: Optional[IResourceManager] = None,
        manager_factory: Optional[ManagerFactory] = None,
        api_version: str = DEFAULT_API_VERSION,
        ctx: Any = None,
        scope: Any = None,
        get_params: Union[Mapping[str, Any], Callable[[], Optional[Mapping[str, Any]]], None] = None,
        limit: int = DEFAULT_PAGE_SIZE,
        id_key: str = DEFAULT_ID_KEY,
        filter_options: Optional[Mapping[str, Any]] = None,
        filter: Optional[Mapping[str, Any]] = None,
        steady_status: Any = None,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL_SEC,
        scheduler: Optional[Scheduler] = None,
        settings: Any = None,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__(event_bus)
        if callable(resource) and not isinstance(resource, str):
            if fetch_fn is not None:
                raise OperationArgumentError("Pass either a fetch function or fetch_fn, not both")
            fetch_fn, resource = resource, None
        if manager is None and isinstance(resource, str):
            if manager_factory is None:
                from ..infrastructure.transport.http_manager import HttpResourceManager

                manager_factory = HttpResourceManager.from_environment
            manager = manager_factory(resource, api_version)
        if manager is None and fetch_fn is None:
            raise OperationArgumentError("A resource name, a manager or a fetch function is required")
        if limit <= 0:
            raise OperationArgumentError(f"limit must be positive, got {limit!r}")
        if scheduler is None:
            from ..infrastructure.scheduling.qt_scheduler import QtTimerScheduler

            scheduler = QtTimerScheduler()

        self.resource_name = resource or getattr(manager, "resource", "") or ""
        self._manager = manager
        self._fetch_fn = fetch_fn
        self._ctx = ctx
        self._scope = scope
        self._get_params = get_params
        self._limit = limit
        self.id_key = id_key
        self._filter_options: Dict[str, Any] = dict(filter_options or {})
        self.steady_status = normalize_steady_status(steady_status)
        self.refresh_interval = refresh_interval
        self._settings = settings
        self._error_handler = error_handler
        self.params: Dict[str, Any] = {}

        # Observable state
        self.records = ObservableProperty({})
        self.page = ObservableProperty(PageState(offset=0, limit=limit, total=0))
        self.filter = ObservableProperty(dict(filter or {}))
        self.selected_items = ObservableProperty([])
        self.selected_ids = ObservableProperty([])
        self.loading = ObservableProperty(False)

        # Signals
        self.records_updated = Signal()  # emits (records)
        self.record_changed = Signal()  # emits (id, record)
        self.record_settled = Signal()  # emits (id, data)
        self.selection_changed = Signal()  # emits (ids)
        self.error_occurred = Signal()  # emits (message)

        self._fetch_generation = 0
        self._polls = PollRegistry(
            fetch=self._fetch_one,
            on_data=self.patch,
            on_gone=self._on_resource_gone,
            on_error=self._on_poll_error,
            on_settled=self._on_poll_settled,
            scheduler=scheduler,
            interval=refresh_interval,
        )

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------
    @property
    def manager(self) -> Optional[IResourceManager]:
        return self._manager

    def current_limit(self) -> int:
        """Remembered page size, falling back to the configured one."""
        stored = self._settings.get(LIST_LIMIT_SETTINGS_KEY) if self._settings is not None else None
        return stored or self._limit

    def get_option_params(self) -> Dict[str, Any]:
        if callable(self._get_params):
            return dict(self._get_params() or {})
        return dict(self._get_params or {})

    def _resolve_scope(self) -> Any:
        return self._scope() if callable(self._scope) else self._scope

    def build_params(self, offset: int = 0, limit: int = 0) -> Dict[str, Any]:
        query = (
            ListQuery(limit=limit or self.current_limit(), offset=offset)
            .with_scope(self._resolve_scope())
            .with_params(self.get_option_params())
        )
        return self.compile_filter_params(query.to_params())

    def compile_filter_params(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Return *params* combined with the parameters of the active filters."""
        params = dict(params or {})
        params.update(compile_filter_params(params, self.filter.value, self._filter_options))
        return params

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------
    def fetch(
        self,
        offset: int = 0,
        limit: int = 0,
        token: Optional[CancellationToken] = None,
    ) -> Optional[Dict[Any, ItemRecord]]:
        """Fetch one page and replace the local records with it.

        Returns the new records, or ``None`` when the result was discarded
        because it went stale while the request was in flight.  List failures
        propagate to the caller.
        """
        if self._disposed:
            _LOGGER.debug("Ignoring fetch on disposed list %s", self.resource_name)
            return None
        if offset < 0:
            raise OperationArgumentError(f"offset must not be negative, got {offset!r}")
        self._fetch_generation += 1
        generation = self._fetch_generation
        params = self.build_params(offset, limit)
        self.params = params
        _LOGGER.debug("Fetching %s with %s", self.resource_name, params)
        self.loading.value = True
        try:
            raw = self._call_list(params)
        except Exception as exc:
            if self._is_stale(generation, token):
                _LOGGER.debug("Dropping failure of stale fetch for %s: %s", self.resource_name, exc)
                return None
            _LOGGER.error("Failed to fetch %s: %s", self.resource_name, exc)
            self.error_occurred.emit(str(exc))
            raise
        finally:
            if generation == self._fetch_generation:
                self.loading.value = False

        if self._is_stale(generation, token):
            _LOGGER.debug("Discarding stale page of %s", self.resource_name)
            return None
        return self._apply_page(Response.coerce(raw), params)

    def refresh(self, token: Optional[CancellationToken] = None) -> Optional[Dict[Any, ItemRecord]]:
        """Fetch the current page again without moving offset or page size."""
        return self.fetch(self.page.value.offset, self.current_limit(), token=token)

    def reset(self) -> None:
        """Drop records, pagination and selection, and stop every poll."""
        self._fetch_generation += 1
        self._polls.cancel_all()
        self.page.value = PageState(offset=0, limit=self.current_limit(), total=0)
        self.records.value = {}
        self.clear_selection()
        self.loading.value = False

    def dispose(self) -> None:
        super().dispose()
        self._fetch_generation += 1
        self._polls.cancel_all()

    def _call_list(self, params: Dict[str, Any]) -> Any:
        if self._fetch_fn is not None:
            return self._fetch_fn(dict(params))
        return self._manager.list(params=dict(params), ctx=self._ctx)

    def _is_stale(self, generation: int, token: Optional[CancellationToken]) -> bool:
        if self._disposed or generation != self._fetch_generation:
            return True
        return token is not None and token.cancelled

    def _apply_page(self, response: Response, params: Mapping[str, Any]) -> Dict[Any, ItemRecord]:
        payload = response.data or {}
        if isinstance(payload, list):
            payload = {"data": payload}
        rows = payload.get("data") or []
        total = payload.get("total")
        response_limit = payload.get("limit") or 0
        requested_offset = params.get("offset", 0)
        requested_limit = params.get("limit") or self.current_limit()

        self._polls.cancel_all()
        records = self._wrap_rows(rows)
        self.records.value = records
        if response_limit > 0:
            page = PageState(offset=payload.get("offset") or 0, limit=response_limit)
        else:
            page = PageState(offset=requested_offset, limit=requested_limit)
        page.total = total if total else len(rows)
        self.page.value = page
        _LOGGER.info(
            "Fetched %d %s (offset=%d, total=%d)",
            len(records), self.resource_name or "rows", page.offset, page.total,
        )
        self.records_updated.emit(records)
        self.publish(PageFetchedEvent(
            resource=self.resource_name,
            offset=page.offset,
            limit=page.limit,
            total=page.total,
            ids=list(records),
        ))
        self.check_steady_status()
        return records

    def _wrap_rows(self, rows: Iterable[Mapping[str, Any]]) -> Dict[Any, ItemRecord]:
        records: Dict[Any, ItemRecord] = {}
        for index, row in enumerate(rows):
            record = ItemRecord.from_row(row, self.id_key, index)
            records[record.id] = record
        return records

    # ------------------------------------------------------------------
    # Pagination and filters
    # ------------------------------------------------------------------
    def change_page(self, page_number: int) -> Optional[Dict[Any, ItemRecord]]:
        if page_number < 1:
            raise OperationArgumentError(f"page number must be >= 1, got {page_number!r}")
        limit = self.current_limit()
        return self.fetch((page_number - 1) * limit, limit)

    def change_page_size(self, page_size: int) -> Optional[Dict[Any, ItemRecord]]:
        """Remember *page_size* and fetch the page containing the current offset."""
        if page_size < 1:
            raise OperationArgumentError(f"page size must be >= 1, got {page_size!r}")
        if self._settings is not None:
            self._settings.set(LIST_LIMIT_SETTINGS_KEY, page_size)
        offset = (self.page.value.offset // page_size) * page_size
        self._limit = page_size
        return self.fetch(offset, page_size)

    def change_filter(self, new_filter: Optional[Mapping[str, Any]]) -> Optional[Dict[Any, ItemRecord]]:
        self.filter.value = dict(new_filter or {})
        self.reset()
        return self.fetch(0, 0)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select(self, rows: Iterable[Mapping[str, Any]]) -> None:
        items = list(rows)
        ids = [row.get(self.id_key) for row in items]
        self.selected_items.value = items
        self.selected_ids.value = ids
        self.selection_changed.emit(ids)

    def clear_selection(self) -> None:
        if self.selected_items.value or self.selected_ids.value:
            self.selected_items.value = []
            self.selected_ids.value = []
            self.selection_changed.emit([])

    def compute_allow_batch_delete(self) -> bool:
        items = self.selected_items.value
        if not items:
            return False
        for item in items:
            disable_delete = item.get("disable_delete")
            can_delete = item.get("can_delete")
            if isinstance(disable_delete, bool) and disable_delete:
                return False
            if isinstance(can_delete, bool) and not can_delete:
                return False
        return True

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------
    def get_record(self, id: Any) -> Optional[ItemRecord]:
        return self.records.value.get(id)

    def patch(self, id: Any, data: Mapping[str, Any]) -> ItemRecord:
        """Replace the data of record *id*, creating the record if needed."""
        record = self.records.value.get(id)
        if record is None:
            record = ItemRecord(id=id, data=dict(data))
            with self.records.mutate() as records:
                records[id] = record
        else:
            record.replace_data(data)
        self.record_changed.emit(id, record)
        self.publish(RecordPatchedEvent(resource=self.resource_name, record_id=id, data=record.data))
        return record

    def set_error(self, id: Any, error: Optional[Exception]) -> bool:
        """Attach *error* to record *id*.  Unknown ids are ignored."""
        record = self.records.value.get(id)
        if record is None:
            _LOGGER.debug("No record %r to attach error %s to", id, error)
            return False
        record.set_error(error)
        self.record_changed.emit(id, record)
        self.publish(RecordErrorEvent(resource=self.resource_name, record_id=id, error=error))
        return True

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------
    @property
    def can_poll(self) -> bool:
        return self._manager is not None

    def check_steady_status(self) -> None:
        """Start polling every record that does not match the list steady status."""
        if not self.steady_status or not self.records.value:
            return
        if not self.can_poll:
            _LOGGER.debug("No manager for %s; skipping steady status polling", self.resource_name)
            return
        for key, record in self.records.value.items():
            if not is_steady(record.data, self.steady_status):
                self._polls.start(key, self.steady_status)

    def wait_status(self, id: Any, steady_status: Any) -> None:
        """(Re)start polling record *id* until it matches *steady_status*."""
        if id not in self.records.value:
            raise RecordNotFoundError(f"No record {id!r} in {self.resource_name or 'list'}")
        self._start_poll(id, normalize_steady_status(steady_status))

    def cancel_poll(self, id: Any) -> None:
        self._polls.cancel(id)

    def clear_polls(self) -> None:
        self._polls.cancel_all()

    def is_polling(self, id: Any) -> bool:
        return self._polls.is_active(id)

    def polling_ids(self) -> List[Any]:
        return self._polls.active_keys()

    def _start_poll(self, id: Any, spec: Optional[Dict[str, Any]]) -> None:
        if not spec or not self.can_poll:
            return
        if id not in self.records.value:
            _LOGGER.debug("Not polling %r: no such record", id)
            return
        self._polls.start(id, spec)

    def _fetch_one(self, id: Any) -> Mapping[str, Any]:
        response = Response.coerce(self._manager.get(id=id, params=self.get_option_params()))
        return response.data or {}

    def _on_resource_gone(self, id: Any) -> None:
        self.publish(ResourceGoneEvent(resource=self.resource_name, record_id=id))
        try:
            self.refresh()
        except TransportError as exc:
            self._report(exc, ErrorSeverity.ERROR, {"record_id": id})

    def _on_poll_error(self, id: Any, error: Exception) -> None:
        self.set_error(id, error)
        self._report(error, ErrorSeverity.WARNING, {"record_id": id})

    def _on_poll_settled(self, id: Any, data: Mapping[str, Any]) -> None:
        _LOGGER.info("%s %r settled", self.resource_name or "record", id)
        self.record_settled.emit(id, data)
        self.publish(PollSettledEvent(resource=self.resource_name, record_id=id, data=dict(data)))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def on_manager(
        self,
        method: Union[str, OperationKind],
        *,
        ids: Any = _SELECTION,
        steady_status: Any = None,
        manager_args: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Response]:
        """Call *method* on the transport and sync the affected records.

        ``ids`` defaults to the current selection.  Create/delete style calls
        refresh the page; every other call patches the records from the
        response (single or batched) and then polls them when a steady status
        is given.  Returns ``None`` when the list has no manager.
        """
        kind = _coerce_kind(method)
        if manager_args is None:
            manager_args = {}
        if not isinstance(manager_args, Mapping):
            raise OperationArgumentError(
                f"manager_args must be a mapping of {kind.value} arguments, got {type(manager_args).__name__}"
            )
        args = dict(manager_args)
        if ids is _SELECTION:
            ids = list(self.selected_ids.value)
        keys = self._bind_ids(kind, ids, args)
        if kind in _NEEDS_ACTION and not isinstance(args.get("action"), str):
            raise OperationArgumentError(f"{kind.value} requires an action name")
        spec = normalize_steady_status(steady_status)

        if self._manager is None:
            _LOGGER.debug("No manager for %s; %s is a no-op", self.resource_name, kind.value)
            return None

        try:
            raw = getattr(self._manager, kind.value)(**args)
        except TransportError as exc:
            for key in keys:
                self.set_error(key, exc)
            raise
        response = Response.coerce(raw)

        if kind.value in REFRESH_OPERATIONS:
            self.refresh()
            return response
        if kind is not OperationKind.GET:
            self._apply_response(kind, response, keys)
        if spec:
            for key in keys:
                self._start_poll(key, spec)
        return response

    def _bind_ids(self, kind: OperationKind, ids: Any, args: Dict[str, Any]) -> List[Any]:
        id_argument = _ID_ARGUMENT[kind]
        if ids is None or (isinstance(ids, (list, tuple, set, frozenset)) and not ids):
            if id_argument is not None and id_argument not in args:
                raise OperationArgumentError(f"{kind.value} requires at least one id")
            keys: List[Any] = []
        elif isinstance(ids, (list, tuple, set, frozenset)):
            keys = list(ids)
        elif isinstance(ids, Hashable):
            keys = [ids]
        else:
            raise OperationArgumentError(f"ids must be an id or a list of ids, got {type(ids).__name__}")

        if id_argument == "id":
            if len(keys) > 1:
                raise OperationArgumentError(f"{kind.value} takes a single id, got {len(keys)}")
            if keys:
                args.setdefault("id", keys[0])
            keys = keys or [args["id"]]
        elif id_argument == "ids":
            if keys:
                args.setdefault("ids", keys)
            keys = keys or list(args["ids"])
        return keys

    def _apply_response(self, kind: OperationKind, response: Response, keys: List[Any]) -> None:
        if isinstance(response.data, list):
            for item in response.data:
                result = item if isinstance(item, BatchResult) else BatchResult.from_mapping(item)
                self._apply_result(kind, result.id, result.ok, result.status, result.data)
        elif keys:
            self._apply_result(kind, keys[0], response.ok, response.status, response.data)

    def _apply_result(self, kind: OperationKind, id: Any, ok: bool, status: int, data: Any) -> None:
        if ok:
            if isinstance(data, Mapping):
                self.patch(id, data)
            return
        _LOGGER.warning("%s of %r failed with status %s", kind.value, id, status)
        self.set_error(id, OperationFailedError(f"{kind.value} of {id!r} failed", status=status, payload=data))

    def single_operate(
        self,
        kind: Union[str, OperationKind],
        id: Any,
        payload: Optional[Mapping[str, Any]] = None,
        steady_status: Any = None,
        action: Optional[str] = None,
    ) -> Optional[Response]:
        kind = _coerce_kind(kind)
        if kind.is_batch:
            raise OperationArgumentError(f"{kind.value} is a batch operation; use batch_operate")
        args: Dict[str, Any] = {}
        if kind is OperationKind.GET:
            args["params"] = self.get_option_params()
        else:
            args["data"] = dict(payload) if payload is not None else None
        if action is not None:
            args["action"] = action
        if kind is OperationKind.CREATE:
            id = None
        return self.on_manager(kind, ids=id, steady_status=steady_status, manager_args=args)

    def batch_operate(
        self,
        kind: Union[str, OperationKind],
        ids: Optional[List[Any]] = None,
        payload: Optional[Mapping[str, Any]] = None,
        steady_status: Any = None,
        action: Optional[str] = None,
    ) -> Optional[Response]:
        """Run *kind* on *ids* (default: the selection) in one batched call."""
        kind = _batch_kind(kind)
        args: Dict[str, Any] = {"data": dict(payload) if payload is not None else None}
        if action is not None:
            args["action"] = action
        if ids is None:
            ids = list(self.selected_ids.value)
        return self.on_manager(kind, ids=list(ids), steady_status=steady_status, manager_args=args)

    # Convenience wrappers ---------------------------------------------
    def create(self, data: Mapping[str, Any]) -> Optional[Response]:
        return self.single_operate(OperationKind.CREATE, None, data)

    def single_update(self, id: Any, data: Mapping[str, Any], steady_status: Any = None) -> Optional[Response]:
        return self.single_operate(OperationKind.UPDATE, id, data, steady_status)

    def batch_update(
        self, data: Mapping[str, Any], steady_status: Any = None, ids: Optional[List[Any]] = None
    ) -> Optional[Response]:
        return self.batch_operate(OperationKind.UPDATE, ids, data, steady_status)

    def single_perform_action(
        self, action: str, data: Mapping[str, Any], steady_status: Any = None
    ) -> Optional[Response]:
        """Perform *action* on the record whose id is ``data["id"]``."""
        payload = dict(data)
        if "id" not in payload:
            raise OperationArgumentError("single_perform_action needs the target id in data['id']")
        id = payload.pop("id")
        return self.single_operate(OperationKind.PERFORM_ACTION, id, payload, steady_status, action=action)

    def batch_perform_action(
        self,
        action: str,
        data: Optional[Mapping[str, Any]] = None,
        steady_status: Any = None,
        ids: Optional[List[Any]] = None,
    ) -> Optional[Response]:
        return self.batch_operate(OperationKind.PERFORM_ACTION, ids, data, steady_status, action=action)

    def single_delete(self, id: Any, data: Optional[Mapping[str, Any]] = None) -> Optional[Response]:
        return self.single_operate(OperationKind.DELETE, id, data)

    def batch_delete(
        self, ids: Optional[List[Any]] = None, data: Optional[Mapping[str, Any]] = None
    ) -> Optional[Response]:
        return self.batch_operate(OperationKind.DELETE, ids, data)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------
    def _report(self, error: Exception, severity: ErrorSeverity, context: Dict[str, Any]) -> None:
        context = {"resource": self.resource_name, **context}
        if self._error_handler is not None:
            self._error_handler.handle(error, severity, context)
        else:
            _LOGGER.log(
                getattr(logging, severity.name), "%s: %s (%s)", error.__class__.__name__, error, context
            )
        if severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self.error_occurred.emit(str(error))
