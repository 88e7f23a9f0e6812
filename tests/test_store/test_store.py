"""Tests for the report collection store."""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from ghr.errors import DecodeError, TransportError
from ghr.store.store import ReportStore, StoreChange, StoreState


def _source(*results):
    """A mock report source whose fetch returns or raises each result in turn."""
    source = MagicMock()
    source.fetch = AsyncMock(side_effect=list(results))
    return source


def _wrapped(wrapped_payload, report_id):
    return dict(wrapped_payload, id=report_id)


class TestInitialState:
    def test_starts_empty(self):
        store = ReportStore(_source())
        assert store.state is StoreState.EMPTY
        assert store.reports == ()
        assert store.version == 0
        assert store.error is None


class TestRefresh:
    def test_loads_reports(self, wrapped_payload):
        store = ReportStore(_source([_wrapped(wrapped_payload, "a")]))

        assert asyncio.run(store.refresh()) is True
        assert store.state is StoreState.LOADED
        assert len(store.reports) == 1
        assert store.reports[0].id == "a"
        assert store.version == 1

    def test_empty_collection_is_loaded(self):
        store = ReportStore(_source([]))
        asyncio.run(store.refresh())
        assert store.state is StoreState.LOADED
        assert store.reports == ()

    def test_replaces_instead_of_merging(self, wrapped_payload):
        store = ReportStore(
            _source(
                [_wrapped(wrapped_payload, "a"), _wrapped(wrapped_payload, "b")],
                [_wrapped(wrapped_payload, "c")],
            )
        )
        asyncio.run(store.refresh())
        first = store.reports
        asyncio.run(store.refresh())

        assert [r.id for r in store.reports] == ["c"]
        assert store.reports is not first
        assert [r.id for r in first] == ["a", "b"]
        assert store.version == 2

    def test_snapshot_identity_stable_between_refreshes(self, wrapped_payload):
        store = ReportStore(_source([_wrapped(wrapped_payload, "a")]))
        asyncio.run(store.refresh())
        assert store.reports is store.reports

    def test_get_by_id(self, wrapped_payload):
        store = ReportStore(
            _source([_wrapped(wrapped_payload, "a"), _wrapped(wrapped_payload, "b")])
        )
        asyncio.run(store.refresh())
        assert store.get("b").id == "b"
        assert store.get("zzz") is None

    def test_refresh_while_loading_is_ignored(self, wrapped_payload):
        nested = []
        store = None

        async def fetch():
            assert store.state is StoreState.LOADING
            nested.append(await store.refresh())
            return [_wrapped(wrapped_payload, "a")]

        source = MagicMock()
        source.fetch = fetch
        store = ReportStore(source)

        assert asyncio.run(store.refresh()) is True
        assert nested == [False]
        assert store.state is StoreState.LOADED
        assert store.version == 1


class TestRefreshFailure:
    def test_transport_failure_surfaces_error(self):
        error = TransportError("http://ghr:8080/reports", "connection refused")
        store = ReportStore(_source(error))

        assert asyncio.run(store.refresh()) is False
        assert store.state is StoreState.ERROR
        assert store.error is error
        assert store.reports == ()
        assert store.version == 0

    def test_transport_failure_silent_mode_stays_empty(self):
        store = ReportStore(
            _source(TransportError("http://ghr:8080/reports", "boom")),
            surface_errors=False,
        )
        asyncio.run(store.refresh())
        assert store.state is StoreState.EMPTY
        assert store.reports == ()
        assert store.error is None

    def test_silent_mode_keeps_loaded_state(self, wrapped_payload):
        store = ReportStore(
            _source([_wrapped(wrapped_payload, "a")], DecodeError("bad")),
            surface_errors=False,
        )
        asyncio.run(store.refresh())
        asyncio.run(store.refresh())
        assert store.state is StoreState.LOADED
        assert [r.id for r in store.reports] == ["a"]

    def test_decode_failure(self):
        store = ReportStore(_source({"not": "an array"}))
        asyncio.run(store.refresh())
        assert store.state is StoreState.ERROR
        assert isinstance(store.error, DecodeError)

    def test_failure_keeps_previous_snapshot(self, wrapped_payload):
        store = ReportStore(
            _source([_wrapped(wrapped_payload, "a")], TransportError("x", "down"))
        )
        asyncio.run(store.refresh())
        snapshot = store.reports
        asyncio.run(store.refresh())

        assert store.state is StoreState.ERROR
        assert store.reports is snapshot
        assert store.version == 1

    def test_recovers_after_error(self, wrapped_payload):
        store = ReportStore(
            _source(TransportError("x", "down"), [_wrapped(wrapped_payload, "a")])
        )
        asyncio.run(store.refresh())
        asyncio.run(store.refresh())
        assert store.state is StoreState.LOADED
        assert store.error is None

    def test_unexpected_exception_propagates_and_resets_state(self):
        store = ReportStore(_source(RuntimeError("bug")))
        with pytest.raises(RuntimeError):
            asyncio.run(store.refresh())
        assert store.state is StoreState.EMPTY


class TestListeners:
    def test_notified_on_each_transition(self, wrapped_payload):
        changes = []
        store = ReportStore(_source([_wrapped(wrapped_payload, "a")]))
        store.subscribe(changes.append)

        asyncio.run(store.refresh())

        assert changes == [
            StoreChange(StoreState.EMPTY, StoreState.LOADING, 0, False),
            StoreChange(StoreState.LOADING, StoreState.LOADED, 1, True),
        ]

    def test_snapshot_visible_when_notified(self, wrapped_payload):
        seen = []
        store = ReportStore(_source([_wrapped(wrapped_payload, "a")]))
        store.subscribe(
            lambda change: seen.append([r.id for r in store.reports])
            if change.reports_changed
            else None
        )
        asyncio.run(store.refresh())
        assert seen == [["a"]]

    def test_error_transition(self):
        changes = []
        store = ReportStore(_source(TransportError("x", "down")))
        store.subscribe(changes.append)
        asyncio.run(store.refresh())
        assert changes[-1].current is StoreState.ERROR
        assert changes[-1].reports_changed is False

    def test_unsubscribe(self, wrapped_payload):
        listener = MagicMock()
        store = ReportStore(_source([_wrapped(wrapped_payload, "a")]))
        unsubscribe = store.subscribe(listener)
        unsubscribe()
        unsubscribe()

        asyncio.run(store.refresh())
        listener.assert_not_called()

    def test_failing_listener_does_not_break_refresh(self, wrapped_payload):
        healthy = MagicMock()
        store = ReportStore(_source([_wrapped(wrapped_payload, "a")]))
        store.subscribe(MagicMock(side_effect=RuntimeError("render failed")))
        store.subscribe(healthy)

        assert asyncio.run(store.refresh()) is True
        assert store.state is StoreState.LOADED
        assert healthy.call_count == 2


class TestSourceDescription:
    def test_exposes_source(self):
        source = _source()
        assert ReportStore(source).source is source

    def test_refresh_logs_source(self, caplog):
        source = _source([])
        source.describe.return_value = "http://ghr:8080/reports"
        store = ReportStore(source)

        with caplog.at_level(logging.DEBUG, logger="ghr.store.store"):
            asyncio.run(store.refresh())

        source.describe.assert_called_once_with()
        assert "Fetching reports from http://ghr:8080/reports" in caplog.text
