"""Tests for ResourceListViewModel - pure Python, manual scheduler, mocked transport."""

import uuid
from unittest.mock import Mock

import pytest

from listsync.application.cancellation import CancellationToken
from listsync.domain.models import FilterOption, Response
from listsync.errors import (
    OperationArgumentError,
    OperationFailedError,
    RecordNotFoundError,
    ResourceNotFoundError,
    TransportError,
    UnknownFilterError,
)
from listsync.events.bus import EventBus
from listsync.events.list_events import PageFetchedEvent, PollSettledEvent, ResourceGoneEvent
from listsync.viewmodels.resource_list_viewmodel import OperationKind, ResourceListViewModel


def _make_vm(manager, scheduler, **kwargs):
    return ResourceListViewModel(manager=manager, scheduler=scheduler, **kwargs)


class TestFetch:
    def test_fetch_replaces_records_keyed_by_id(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        records = vm.fetch()

        assert list(records) == ["a", "b"]
        assert vm.records.value["b"].data["name"] == "beta"
        assert vm.records.value["b"].ordinal_index == 1
        assert vm.page.value.total == 2
        assert vm.loading.value is False
        manager.list.assert_called_once_with(params={"limit": 20}, ctx=None)

    def test_total_falls_back_to_row_count(self, make_manager, scheduler):
        manager = make_manager([{"id": "a"}, {"id": "b"}, {"id": "c"}])
        vm = _make_vm(manager, scheduler)

        vm.fetch()

        assert vm.page.value.total == 3

    def test_server_total_wins(self, make_manager, scheduler):
        manager = make_manager([{"id": "a"}], total=57)
        vm = _make_vm(manager, scheduler)

        vm.fetch(20, 10)

        assert vm.page.value.total == 57
        assert vm.page.value.offset == 20
        assert vm.page.value.limit == 10
        manager.list.assert_called_once_with(params={"limit": 10, "offset": 20}, ctx=None)

    def test_server_pagination_echo_is_used(self, make_manager, scheduler):
        manager = make_manager()
        manager.list.return_value = {"data": {"data": [{"id": "x"}], "limit": 5, "offset": 15, "total": 16}}
        vm = _make_vm(manager, scheduler)

        vm.fetch(10, 5)

        assert vm.page.value.offset == 15
        assert vm.page.value.limit == 5

    def test_custom_id_key(self, make_manager, scheduler):
        manager = make_manager([{"uuid": "u1"}, {"uuid": "u2"}])
        vm = _make_vm(manager, scheduler, id_key="uuid")

        vm.fetch()

        assert list(vm.records.value) == ["u1", "u2"]

    def test_fetch_replaces_not_merges(self, make_manager, scheduler):
        manager = make_manager([{"id": "a"}, {"id": "b"}])
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        manager.list.return_value = Response(data={"data": [{"id": "c"}]})

        vm.fetch()

        assert list(vm.records.value) == ["c"]

    def test_scope_and_extra_params(self, manager, scheduler):
        vm = _make_vm(manager, scheduler, scope="project", get_params=lambda: {"details": True}, ctx="ctx-1")

        vm.fetch()

        manager.list.assert_called_once_with(
            params={"scope": "project", "details": True, "limit": 20}, ctx="ctx-1"
        )

    def test_list_failure_propagates(self, manager, scheduler):
        manager.list.side_effect = TransportError("down", status=503)
        vm = _make_vm(manager, scheduler)
        errors = []
        vm.error_occurred.connect(errors.append)

        with pytest.raises(TransportError):
            vm.fetch()

        assert errors == ["down"]
        assert vm.loading.value is False

    def test_negative_offset_rejected(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.fetch(-1)

    def test_page_fetched_event(self, manager, scheduler):
        bus = EventBus()
        received = []
        bus.subscribe(PageFetchedEvent, received.append)
        vm = _make_vm(manager, scheduler, event_bus=bus)

        vm.fetch()

        assert len(received) == 1
        assert received[0].ids == ["a", "b"]
        assert received[0].resource == "servers"


class TestStaleFetches:
    def test_superseded_fetch_is_discarded(self, make_manager, scheduler):
        manager = make_manager()
        vm = _make_vm(manager, scheduler)

        def list_call(params, ctx):
            if manager.list.call_count == 1:
                vm.fetch()
                return Response(data={"data": [{"id": "old"}]})
            return Response(data={"data": [{"id": "new"}]})

        manager.list.side_effect = list_call

        result = vm.fetch()

        assert result is None
        assert list(vm.records.value) == ["new"]
        assert vm.loading.value is False

    def test_cancelled_token_discards_result(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        token = CancellationToken()

        def list_call(params, ctx):
            token.cancel()
            return Response(data={"data": [{"id": "a"}]})

        manager.list.side_effect = list_call

        assert vm.fetch(token=token) is None
        assert vm.records.value == {}

    def test_disposed_context_discards_result(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        updates = Mock()
        vm.records_updated.connect(updates)

        def list_call(params, ctx):
            vm.dispose()
            return Response(data={"data": [{"id": "a"}]})

        manager.list.side_effect = list_call

        assert vm.fetch() is None
        assert vm.records.value == {}
        updates.assert_not_called()

    def test_stale_failure_is_silent(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        errors = []
        vm.error_occurred.connect(errors.append)

        def list_call(params, ctx):
            vm.dispose()
            raise TransportError("late")

        manager.list.side_effect = list_call

        assert vm.fetch() is None
        assert errors == []

    def test_stale_unexpected_failure_is_silent(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        def list_call(params, ctx):
            vm.dispose()
            raise ValueError("late and malformed")

        manager.list.side_effect = list_call

        assert vm.fetch() is None

    def test_fetch_after_dispose_is_ignored(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        vm.dispose()

        assert vm.fetch() is None
        manager.list.assert_not_called()


class TestPagination:
    def test_change_page(self, manager, scheduler):
        vm = _make_vm(manager, scheduler, limit=10)

        vm.change_page(3)

        manager.list.assert_called_once_with(params={"limit": 10, "offset": 20}, ctx=None)
        assert vm.page.value.current_page == 3

    def test_change_page_rejects_zero(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.change_page(0)

    def test_change_page_size_rebases_offset_and_persists(self, manager, scheduler, settings):
        vm = _make_vm(manager, scheduler, settings=settings)
        vm.fetch(120, 20)

        vm.change_page_size(50)

        assert settings.set_calls == [("list.limit", 50)]
        assert vm.page.value.offset == 100
        assert vm.page.value.limit == 50
        assert manager.list.call_args.kwargs["params"] == {"limit": 50, "offset": 100}
        assert vm.current_limit() == 50

    def test_remembered_page_size_is_used(self, manager, scheduler, settings):
        settings.values["list.limit"] = 30
        vm = _make_vm(manager, scheduler, settings=settings)

        vm.fetch()

        manager.list.assert_called_once_with(params={"limit": 30}, ctx=None)

    def test_refresh_keeps_offset(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        vm.fetch(40)
        manager.list.reset_mock()

        vm.refresh()

        manager.list.assert_called_once_with(params={"limit": 20, "offset": 40}, ctx=None)


class TestFilters:
    def test_change_filter_compiles_and_resets_offset(self, manager, scheduler):
        vm = _make_vm(
            manager,
            scheduler,
            filter_options={"name": FilterOption(formatter=str.strip, filter=True)},
        )
        vm.fetch(40)
        vm.select([{"id": "a"}])

        vm.change_filter({"name": "  x  "})

        assert manager.list.call_args.kwargs["params"] == {"limit": 20, "filter": ["x"]}
        assert vm.page.value.offset == 0
        assert vm.selected_ids.value == []

    def test_base_filter_from_extra_params_is_merged(self, manager, scheduler):
        vm = _make_vm(
            manager,
            scheduler,
            get_params={"filter": ["tenant.equals(t1)"]},
            filter_options={"status": {"filter": True, "formatter": lambda v: f"status.equals({v})"}},
            filter={"status": "ready"},
        )

        vm.fetch()

        assert manager.list.call_args.kwargs["params"]["filter"] == [
            "tenant.equals(t1)",
            "status.equals(ready)",
        ]

    def test_named_filter_parameter(self, manager, scheduler):
        vm = _make_vm(manager, scheduler, filter_options={"name": {}})

        vm.change_filter({"name": "web"})

        assert manager.list.call_args.kwargs["params"] == {"limit": 20, "name": "web"}

    def test_undeclared_filter_is_a_programming_error(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(UnknownFilterError):
            vm.change_filter({"color": "red"})


class TestSelection:
    def test_select_derives_ids(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        emitted = []
        vm.selection_changed.connect(emitted.append)

        vm.select([{"id": "a"}, {"id": "b"}])

        assert vm.selected_ids.value == ["a", "b"]
        assert emitted == [["a", "b"]]

    def test_clear_selection(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        vm.select([{"id": "a"}])

        vm.clear_selection()

        assert vm.selected_items.value == []
        assert vm.selected_ids.value == []

    @pytest.mark.parametrize(
        "rows, expected",
        [
            ([], False),
            ([{"id": "a"}, {"id": "b"}], True),
            ([{"id": "a"}, {"id": "b", "disable_delete": True}], False),
            ([{"id": "a", "can_delete": False}], False),
            ([{"id": "a", "can_delete": True, "disable_delete": False}], True),
            ([{"id": "a", "disable_delete": "yes"}], True),
        ],
    )
    def test_compute_allow_batch_delete(self, manager, scheduler, rows, expected):
        vm = _make_vm(manager, scheduler)
        vm.select(rows)

        assert vm.compute_allow_batch_delete() is expected


class TestPolling:
    def test_pending_record_polls_until_ready(self, make_manager, scheduler):
        manager = make_manager([{"id": "a", "status": "pending"}])
        manager.get.return_value = Response(data={"id": "a", "status": "ready"})
        vm = _make_vm(manager, scheduler, steady_status={"status": ["ready", "failed"]}, refresh_interval=0)
        settled = []
        vm.record_settled.connect(lambda key, data: settled.append(key))

        vm.fetch()

        assert vm.is_polling("a")
        assert [timer.delay for timer in scheduler.pending] == [0]

        scheduler.run_pending()

        manager.get.assert_called_once_with(id="a", params={})
        assert vm.records.value["a"].data["status"] == "ready"
        assert not vm.is_polling("a")
        assert scheduler.pending == []
        assert settled == ["a"]

    def test_steady_rows_are_not_polled(self, manager, scheduler):
        vm = _make_vm(manager, scheduler, steady_status="running")

        vm.fetch()

        assert vm.polling_ids() == []
        assert scheduler.pending == []

    def test_shorthand_steady_status(self, make_manager, scheduler):
        manager = make_manager([{"id": "a", "status": "building"}, {"id": "b", "status": "ready"}])
        vm = _make_vm(manager, scheduler, steady_status=["ready"])

        vm.fetch()

        assert vm.polling_ids() == ["a"]

    def test_refetch_cancels_running_polls(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        vm.wait_status("a", "stopped")
        timer = scheduler.pending[0]

        vm.fetch()

        assert timer.cancelled
        assert not vm.is_polling("a")

    def test_wait_status_unknown_record(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(RecordNotFoundError):
            vm.wait_status("missing", "ready")

    def test_wait_status_twice_keeps_one_timer(self, manager, scheduler):
        manager.get.return_value = Response(data={"id": "a", "status": "running"})
        vm = _make_vm(manager, scheduler)
        vm.fetch()

        vm.wait_status("a", "stopped")
        vm.wait_status("a", "stopped")

        assert len(scheduler.pending) == 1
        vm.cancel_poll("a")
        scheduler.run_until_idle()
        manager.get.assert_not_called()

    def test_not_found_refreshes_collection(self, make_manager, scheduler):
        manager = make_manager([{"id": "a", "status": "deleting"}])
        manager.get.side_effect = ResourceNotFoundError("gone")
        bus = EventBus()
        gone = []
        bus.subscribe(ResourceGoneEvent, gone.append)
        vm = _make_vm(manager, scheduler, event_bus=bus)
        vm.fetch()
        vm.wait_status("a", "deleted")
        manager.list.return_value = Response(data={"data": []})

        scheduler.run_pending()

        assert manager.list.call_count == 2
        assert vm.records.value == {}
        assert [event.record_id for event in gone] == ["a"]
        assert vm.records.value.get("a") is None

    def test_other_poll_error_is_recorded_on_item(self, manager, scheduler):
        error = TransportError("server error", status=500)
        manager.get.side_effect = error
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        vm.wait_status("a", "stopped")
        failures = []
        vm.error_occurred.connect(failures.append)

        scheduler.run_pending()

        assert vm.records.value["a"].last_error is error
        assert not vm.is_polling("a")
        assert scheduler.pending == []
        assert failures == []

    def test_unexpected_poll_failure_is_recorded_on_item(self, manager, scheduler):
        error = ConnectionError("socket reset")
        manager.get.side_effect = error
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        vm.wait_status("a", "stopped")

        scheduler.run_pending()

        assert vm.records.value["a"].last_error is error
        assert not vm.is_polling("a")
        assert scheduler.pending == []

    def test_malformed_poll_envelope_stops_polling(self, manager, scheduler):
        manager.get.return_value = 42
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        vm.wait_status("a", "stopped")

        scheduler.run_pending()

        assert vm.records.value["a"].last_error is not None
        assert not vm.is_polling("a")

    def test_transport_404_refreshes_collection(self, make_manager, scheduler):
        manager = make_manager([{"id": "a", "status": "deleting"}])
        manager.get.side_effect = TransportError("not found", status=404)
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        vm.wait_status("a", "deleted")
        manager.list.return_value = Response(data={"data": []})

        scheduler.run_pending()

        assert manager.list.call_count == 2
        assert vm.records.value == {}

    def test_poll_errors_go_through_error_handler(self, manager, scheduler):
        manager.get.side_effect = TransportError("server error", status=500)
        handler = Mock()
        vm = _make_vm(manager, scheduler, error_handler=handler)
        vm.fetch()
        vm.wait_status("a", "stopped")

        scheduler.run_pending()

        handler.handle.assert_called_once()
        assert handler.handle.call_args.args[2] == {"resource": "servers", "record_id": "a"}

    def test_settled_event_published(self, make_manager, scheduler):
        manager = make_manager([{"id": "a", "status": "pending"}])
        manager.get.return_value = {"data": {"id": "a", "status": "ready"}}
        bus = EventBus()
        settled = []
        bus.subscribe(PollSettledEvent, settled.append)
        vm = _make_vm(manager, scheduler, steady_status="ready", event_bus=bus)

        vm.fetch()
        scheduler.run_pending()

        assert [event.record_id for event in settled] == ["a"]

    def test_dispose_cancels_polls(self, make_manager, scheduler):
        manager = make_manager([{"id": "a", "status": "pending"}])
        vm = _make_vm(manager, scheduler, steady_status="ready")
        vm.fetch()

        vm.dispose()
        scheduler.run_until_idle()

        manager.get.assert_not_called()


class TestOperations:
    def test_mixed_batch_update(self, manager, scheduler):
        manager.batch_update.return_value = Response(
            status=207,
            data=[
                {"id": "a", "status": 200, "data": {"id": "a", "name": "renamed", "status": "updating"}},
                {"id": "b", "status": 409, "data": {"message": "busy"}},
            ],
        )
        vm = _make_vm(manager, scheduler)
        vm.fetch()

        vm.batch_operate("update", ["a", "b"], {"name": "renamed"}, steady_status=None)

        manager.batch_update.assert_called_once_with(ids=["a", "b"], data={"name": "renamed"})
        a, b = vm.records.value["a"], vm.records.value["b"]
        assert a.data == {"id": "a", "name": "renamed", "status": "updating"}
        assert a.last_error is None
        assert b.data["name"] == "beta"
        assert isinstance(b.last_error, OperationFailedError)
        assert b.last_error.status == 409

    def test_batch_with_steady_status_polls_every_id(self, manager, scheduler):
        manager.batch_perform_action.return_value = Response(
            data=[
                {"id": "a", "status": 202, "data": {"id": "a", "status": "stopping"}},
                {"id": "b", "status": 202, "data": {"id": "b", "status": "stopping"}},
            ]
        )
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        vm.select([{"id": "a"}, {"id": "b"}])

        vm.batch_perform_action("stop", steady_status="stopped")

        manager.batch_perform_action.assert_called_once_with(ids=["a", "b"], action="stop", data=None)
        assert sorted(vm.polling_ids()) == ["a", "b"]
        assert len(scheduler.pending) == 2

    def test_patch_precedes_poll(self, manager, scheduler):
        manager.perform_action.return_value = Response(status=202, data={"id": "a", "status": "starting"})
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        observed = []
        vm.record_changed.connect(lambda key, record: observed.append((record.data["status"], vm.is_polling(key))))

        vm.single_perform_action("start", {"id": "a", "force": True}, steady_status="running")

        manager.perform_action.assert_called_once_with(id="a", action="start", data={"force": True})
        assert observed == [("starting", False)]
        assert vm.is_polling("a")

    def test_poll_restarts_even_when_patch_looks_steady(self, manager, scheduler):
        manager.update.return_value = Response(data={"id": "a", "status": "running"})
        vm = _make_vm(manager, scheduler)
        vm.fetch()

        vm.single_update("a", {"name": "x"}, steady_status="running")

        assert vm.is_polling("a")

    def test_single_failure_status_records_error(self, manager, scheduler):
        manager.update.return_value = Response(status=422, data={"message": "invalid"})
        vm = _make_vm(manager, scheduler)
        vm.fetch()

        vm.single_update("a", {"name": ""})

        assert isinstance(vm.records.value["a"].last_error, OperationFailedError)
        assert vm.records.value["a"].data["name"] == "alpha"

    @pytest.mark.parametrize(
        "call, method",
        [
            (lambda vm: vm.single_operate("create", None, {"name": "c"}), "create"),
            (lambda vm: vm.create({"name": "c"}), "create"),
            (lambda vm: vm.single_operate(OperationKind.DELETE, "a"), "delete"),
            (lambda vm: vm.batch_operate("delete", ["a", "b"]), "batch_delete"),
            (lambda vm: vm.batch_delete(["a"]), "batch_delete"),
        ],
    )
    def test_shape_changing_operations_refresh_once(self, manager, scheduler, call, method):
        getattr(manager, method).return_value = Response(status=201, data={"id": "c"})
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        manager.list.reset_mock()
        changed = Mock()
        vm.record_changed.connect(changed)

        call(vm)

        getattr(manager, method).assert_called_once()
        assert manager.list.call_count == 1
        changed.assert_not_called()

    def test_delete_passes_id(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        vm.fetch()

        vm.single_delete("a", {"force": True})

        manager.delete.assert_called_once_with(id="a", data={"force": True})

    def test_transport_failure_marks_records_and_raises(self, manager, scheduler):
        error = TransportError("boom", status=500)
        manager.update.side_effect = error
        vm = _make_vm(manager, scheduler)
        vm.fetch()

        with pytest.raises(TransportError):
            vm.single_update("a", {"name": "x"}, steady_status="running")

        assert vm.records.value["a"].last_error is error
        assert not vm.is_polling("a")

    def test_get_refreshes_record_without_patch_from_operation(self, manager, scheduler):
        manager.get.return_value = Response(data={"id": "a", "status": "building"})
        vm = _make_vm(manager, scheduler, get_params={"details": 1})
        vm.fetch()

        response = vm.single_operate("get", "a")

        manager.get.assert_called_once_with(id="a", params={"details": 1})
        assert response.data["status"] == "building"


class TestOperationArguments:
    def test_unknown_operation(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.on_manager("explode", ids=["a"])

    def test_manager_args_must_be_mapping(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.on_manager("update", ids="a", manager_args=["data"])

    def test_update_without_id(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.on_manager("batch_update")

        manager.batch_update.assert_not_called()

    def test_action_name_required(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.single_operate("perform_action", "a", {})

    def test_single_operation_with_many_ids(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.single_operate("update", ["a", "b"], {})

    def test_batch_kind_through_single_operate(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.single_operate("batch_update", "a", {})

    def test_single_perform_action_needs_id(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.single_perform_action("start", {"force": True})

    def test_opaque_uuid_id(self, make_manager, scheduler):
        key = uuid.uuid4()
        manager = make_manager([{"id": key, "status": "running"}])
        manager.update.return_value = Response(data={"id": key, "status": "updating"})
        vm = _make_vm(manager, scheduler)
        vm.fetch()

        vm.single_update(key, {"name": "x"})

        manager.update.assert_called_once_with(id=key, data={"name": "x"})
        assert vm.records.value[key].data["status"] == "updating"

    def test_set_of_ids_is_a_batch(self, manager, scheduler):
        manager.batch_delete.return_value = Response(data=[])
        vm = _make_vm(manager, scheduler)
        vm.fetch()

        vm.on_manager("batch_delete", ids={"a"})

        manager.batch_delete.assert_called_once_with(ids=["a"])

    def test_invalid_ids_type(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        with pytest.raises(OperationArgumentError):
            vm.on_manager("batch_update", ids={"a": 1})


class TestRecords:
    def test_patch_creates_missing_record(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        record = vm.patch("z", {"id": "z"})

        assert vm.get_record("z") is record
        assert record.ordinal_index is None

    def test_patch_insertion_notifies_records(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)
        vm.fetch()
        changes = []
        vm.records.changed.connect(lambda new, old: changes.append(sorted(new)))

        vm.patch("z", {"id": "z"})
        vm.patch("a", {"id": "a", "status": "stopped"})

        assert changes == [["a", "b", "z"]]

    def test_set_error_ignores_unknown_ids(self, manager, scheduler):
        vm = _make_vm(manager, scheduler)

        assert vm.set_error("nope", RuntimeError("x")) is False

    def test_reset(self, manager, scheduler):
        vm = _make_vm(manager, scheduler, steady_status="stopped")
        vm.fetch(40)
        vm.select([{"id": "a"}])

        vm.reset()

        assert vm.records.value == {}
        assert vm.page.value.offset == 0
        assert vm.selected_ids.value == []
        assert scheduler.pending == []


class TestConstruction:
    def test_fetch_function_mode(self, scheduler):
        fetch_fn = Mock(return_value={"data": {"data": [{"id": "a", "status": "pending"}], "total": 1}})
        vm = ResourceListViewModel(fetch_fn, scheduler=scheduler, steady_status="ready")

        vm.fetch()

        fetch_fn.assert_called_once_with({"limit": 20})
        assert list(vm.records.value) == ["a"]
        assert scheduler.pending == []
        assert vm.single_update("a", {"name": "x"}) is None

    def test_resource_name_uses_factory(self, manager, scheduler):
        factory = Mock(return_value=manager)

        vm = ResourceListViewModel("servers", manager_factory=factory, api_version="v2", scheduler=scheduler)

        factory.assert_called_once_with("servers", "v2")
        assert vm.manager is manager
        assert vm.resource_name == "servers"

    def test_requires_a_source(self, scheduler):
        with pytest.raises(OperationArgumentError):
            ResourceListViewModel(scheduler=scheduler)

    def test_rejects_non_positive_limit(self, manager, scheduler):
        with pytest.raises(OperationArgumentError):
            _make_vm(manager, scheduler, limit=0)
