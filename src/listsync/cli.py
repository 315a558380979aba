"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from listsync.application.services.polling import Scheduler
from listsync.config import (
    API_TOKEN_ENV_VAR,
    API_URL_ENV_VAR,
    DEFAULT_API_VERSION,
    DEFAULT_PAGE_SIZE,
    LIST_LIMIT_SETTINGS_KEY,
)
from listsync.di import Container
from listsync.di.bootstrap import bootstrap
from listsync.domain.models.core import Response
from listsync.domain.models.query import FilterOption
from listsync.domain.services.steady_status import is_steady, normalize_steady_status
from listsync.errors import (
    ListSyncError,
    OperationArgumentError,
    ResourceNotFoundError,
    SettingsError,
    TransportError,
)
from listsync.errors.handler import ErrorHandler
from listsync.events.bus import EventBus
from listsync.events.list_events import ResourceGoneEvent
from listsync.infrastructure.transport.http_manager import HttpManagerFactory
from listsync.settings.manager import SettingsManager
from listsync.utils.fieldpath import get_path
from listsync.utils.logging import configure_logging
from listsync.viewmodels.resource_list_viewmodel import ResourceListViewModel

app = typer.Typer(help="Mirror paginated remote resource lists and wait for resources to settle")
console = Console()

EXIT_SETTLED = 0
EXIT_FAILED = 1
EXIT_TIMEOUT = 2


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (TransportError, OperationArgumentError, SettingsError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(EXIT_FAILED) from exc
        except ListSyncError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(EXIT_FAILED) from exc

    return wrapper


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", envvar=API_URL_ENV_VAR, help="API root URL"),
    token: Optional[str] = typer.Option(None, "--token", envvar=API_TOKEN_ENV_VAR, help="Bearer token"),
    settings_path: Optional[Path] = typer.Option(None, "--settings", help="Settings file location"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    if verbose:
        configure_logging(logging.DEBUG)
    if ctx.obj is None:
        ctx.obj = bootstrap(Container(), settings_path=settings_path, base_url=base_url, token=token)


def _container(ctx: typer.Context) -> Container:
    return ctx.obj


def _parse_pairs(pairs: List[str]) -> Dict[str, str]:
    parsed: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise OperationArgumentError(f"Expected key=value, got {pair!r}")
        parsed[key.strip()] = value
    return parsed


def _parse_data(data: Optional[str]) -> Dict[str, Any]:
    if not data:
        return {}
    try:
        payload = json.loads(data)
    except ValueError as exc:
        raise OperationArgumentError(f"--data is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise OperationArgumentError("--data must be a JSON object")
    return payload


def _make_list(
    container: Container,
    resource: str,
    *,
    api_version: str = DEFAULT_API_VERSION,
    filters: Optional[Dict[str, str]] = None,
    expressions: Optional[List[str]] = None,
    interval: Optional[float] = None,
) -> ResourceListViewModel:
    factory = container.resolve(HttpManagerFactory)
    filters = filters or {}
    options: Dict[str, Any] = {key: FilterOption(formatter=str.strip) for key in filters}
    kwargs: Dict[str, Any] = {}
    if interval is not None:
        kwargs["refresh_interval"] = interval
    return ResourceListViewModel(
        resource,
        manager_factory=factory,
        api_version=api_version,
        get_params={"filter": list(expressions)} if expressions else None,
        filter_options=options,
        filter=filters,
        scheduler=container.resolve(Scheduler),
        settings=container.resolve(SettingsManager),
        event_bus=container.resolve(EventBus),
        error_handler=container.resolve(ErrorHandler),
        **kwargs,
    )


def _render_rows(title: str, rows: List[Dict[str, Any]], columns: List[str]) -> Table:
    if not columns:
        seen: Dict[str, None] = {}
        for row in rows:
            for key in row:
                seen.setdefault(key, None)
        columns = list(seen)
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*("" if row.get(column) is None else str(row.get(column)) for column in columns))
    return table


def _run_until_settled(vm: ResourceListViewModel, id: str, spec: Dict[str, Any], timeout: Optional[float]) -> int:
    """Poll record *id* on a Qt event loop until it settles, fails or times out."""

    from PySide6.QtCore import QCoreApplication, QTimer

    qt_app = QCoreApplication.instance() or QCoreApplication([])
    outcome = {"code": EXIT_TIMEOUT}

    def _finish(code: int) -> None:
        outcome["code"] = code
        vm.clear_polls()
        qt_app.quit()

    def _on_changed(key, record) -> None:
        if key != id:
            return
        if record.last_error is not None:
            print(f"[red]{id}: {record.last_error}")
            _finish(EXIT_FAILED)
            return
        current = {path: get_path(record.data, path) for path in spec}
        print(f"[dim]{id}: {json.dumps(current, default=str)}")

    def _on_settled(key, data) -> None:
        if key == id:
            _finish(EXIT_SETTLED)

    def _on_gone(event: ResourceGoneEvent) -> None:
        if event.record_id == id:
            print(f"[yellow]{id} no longer exists")
            _finish(EXIT_FAILED)

    vm.record_changed.connect(_on_changed)
    vm.record_settled.connect(_on_settled)
    if vm.event_bus is not None:
        vm.subscribe_event(vm.event_bus, ResourceGoneEvent, _on_gone, resource=vm.resource_name)
    vm.wait_status(id, spec)
    if timeout:
        QTimer.singleShot(int(timeout * 1000), lambda: _finish(EXIT_TIMEOUT))
    qt_app.exec()
    vm.dispose()
    if outcome["code"] == EXIT_TIMEOUT:
        print(f"[yellow]Timed out waiting for {id}")
    return outcome["code"]


@app.command("list")
@_handle_errors
def list_rows(
    ctx: typer.Context,
    resource: str = typer.Argument(..., help="Resource name, e.g. servers"),
    page: int = typer.Option(1, "--page", min=1),
    page_size: Optional[int] = typer.Option(None, "--page-size", min=1, help="Rows per page (not remembered)"),
    filters: List[str] = typer.Option([], "--filter", help="Named filter parameter key=value"),
    expressions: List[str] = typer.Option([], "--where", help="Generic filter expression"),
    columns: List[str] = typer.Option([], "--column", help="Columns to show"),
    api_version: str = typer.Option(DEFAULT_API_VERSION, "--api-version"),
) -> None:
    """Fetch one page of RESOURCE and print it."""

    vm = _make_list(
        _container(ctx),
        resource,
        api_version=api_version,
        filters=_parse_pairs(filters),
        expressions=expressions,
    )
    limit = page_size or vm.current_limit()
    records = vm.fetch((page - 1) * limit, limit) or {}
    state = vm.page.value
    rows = [record.data for record in records.values()]
    console.print(_render_rows(resource, rows, columns))
    print(f"Page {state.current_page}/{max(state.total_pages, 1)}, {state.total} total")
    vm.dispose()


@app.command()
@_handle_errors
def wait(
    ctx: typer.Context,
    resource: str = typer.Argument(...),
    id: str = typer.Argument(..., help="Identity of the resource to watch"),
    steady: List[str] = typer.Option(..., "--steady", help="Acceptable status value (repeatable)"),
    field: str = typer.Option("status", "--field", help="Field path holding the status"),
    interval: float = typer.Option(2.0, "--interval", min=0.0, help="Seconds between polls"),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.0, help="Give up after this many seconds"),
    api_version: str = typer.Option(DEFAULT_API_VERSION, "--api-version"),
) -> None:
    """Poll RESOURCE/ID until its status reaches one of the --steady values."""

    spec = {field: list(steady)}
    vm = _make_list(_container(ctx), resource, api_version=api_version, interval=interval)
    try:
        response = Response.coerce(vm.manager.get(id=id, params=vm.get_option_params()))
    except ResourceNotFoundError as exc:
        raise OperationArgumentError(f"{resource}/{id} does not exist") from exc
    record = vm.patch(id, response.data or {})
    if is_steady(record.data, spec):
        print(f"[green]{id} is already steady")
        return
    code = _run_until_settled(vm, id, spec, timeout)
    if code == EXIT_SETTLED:
        print(f"[green]{id} settled")
    raise typer.Exit(code)


@app.command()
@_handle_errors
def action(
    ctx: typer.Context,
    resource: str = typer.Argument(...),
    id: str = typer.Argument(...),
    name: str = typer.Argument(..., help="Action to perform, e.g. start"),
    data: Optional[str] = typer.Option(None, "--data", help="JSON object sent with the action"),
    steady: List[str] = typer.Option([], "--steady", help="Wait for one of these statuses"),
    interval: float = typer.Option(2.0, "--interval", min=0.0),
    timeout: Optional[float] = typer.Option(None, "--timeout", min=0.0),
    api_version: str = typer.Option(DEFAULT_API_VERSION, "--api-version"),
) -> None:
    """Perform action NAME on RESOURCE/ID, optionally waiting for it to settle."""

    spec = normalize_steady_status(list(steady)) if steady else None
    vm = _make_list(_container(ctx), resource, api_version=api_version, interval=interval)
    payload = {"id": id, **_parse_data(data)}
    vm.patch(id, {"id": id})
    response = vm.single_perform_action(name, payload)
    record = vm.get_record(id)
    if record is not None and record.last_error is not None:
        raise OperationArgumentError(f"{name} on {id} failed: {record.last_error}")
    print(f"[green]{name} accepted for {id} (status {response.status if response else 'n/a'})")
    if spec and not is_steady(record.data if record else {}, spec):
        raise typer.Exit(_run_until_settled(vm, id, spec, timeout))


@app.command("page-size")
@_handle_errors
def page_size(
    ctx: typer.Context,
    size: Optional[int] = typer.Argument(None, min=1, help="New remembered page size"),
    reset: bool = typer.Option(False, "--reset", help="Forget the remembered page size"),
) -> None:
    """Show, set or forget the remembered list page size."""

    settings = _container(ctx).resolve(SettingsManager)
    if reset:
        settings.reset(LIST_LIMIT_SETTINGS_KEY)
        print(f"Page size reset to the default of {DEFAULT_PAGE_SIZE}")
        return
    if size is None:
        print(f"Page size: {settings.page_size(DEFAULT_PAGE_SIZE)}")
        return
    settings.remember_page_size(size)
    print(f"[green]Page size set to {size}")


if __name__ == "__main__":  # pragma: no cover
    app()
