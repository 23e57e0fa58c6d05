"""
Unit tests for the centralized dispatcher.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from config.logging_config import ErrorLogSink, Severity
from core.dispatcher import (
    DEFAULT_HANDLERS,
    KIND_ROUTES,
    DispatchRoute,
    ErrorDispatcher,
    classify
)
from core.exceptions import (
    ErrorKind,
    ValidationException,
    ServerException,
    ConnectionException,
    AuthException,
    DatabaseException,
    ApplicationException
)
from tests.fixtures import create_sample_failures
from tests.mocks import RecordingSink


def mocked_handlers():
    return {route: MagicMock(name=f"{route.value}_handler") for route in DispatchRoute}


class TestClassify:
    """Routing follows the priority order of the kinds."""

    @pytest.mark.parametrize("kind,route", [
        (ErrorKind.VALIDATION, DispatchRoute.VALIDATION),
        (ErrorKind.AUTH, DispatchRoute.AUTH),
        (ErrorKind.NETWORK, DispatchRoute.NETWORK),
        (ErrorKind.SERVER, DispatchRoute.NETWORK),
        (ErrorKind.CONNECTION, DispatchRoute.NETWORK),
        (ErrorKind.TIMEOUT, DispatchRoute.NETWORK),
        (ErrorKind.DATABASE, DispatchRoute.APPLICATION),
        (ErrorKind.APPLICATION, DispatchRoute.APPLICATION),
    ])
    def test_known_kinds(self, kind, route):
        assert classify(create_sample_failures()[kind]) == route

    def test_route_table_covers_every_kind(self):
        assert set(KIND_ROUTES) == set(ErrorKind)
        assert set(DEFAULT_HANDLERS) == set(DispatchRoute)

    def test_dispatcher_rejects_incomplete_route_table(self, monkeypatch):
        monkeypatch.delitem(KIND_ROUTES, ErrorKind.TIMEOUT)

        with pytest.raises(ValueError) as exc_info:
            ErrorDispatcher(RecordingSink())

        assert "Timeout" in str(exc_info.value)

    @pytest.mark.parametrize("value", [ValueError("raw"), "just a string", 42, None])
    def test_unrecognized_values(self, value):
        assert classify(value) == DispatchRoute.UNKNOWN


class TestDispatch:
    """Dispatch logs once and invokes exactly one handler."""

    @pytest.fixture
    def sink(self):
        return RecordingSink()

    @pytest.fixture
    def handlers(self):
        return mocked_handlers()

    @pytest.fixture
    def dispatcher(self, sink, handlers):
        return ErrorDispatcher(sink, handlers=handlers)

    def test_validation_routes_to_validation_handler_only(self, dispatcher, sink, handlers):
        failure = ValidationException("x", field_errors={"email": "required"})

        result = dispatcher.dispatch(failure)

        assert result is None
        handlers[DispatchRoute.VALIDATION].assert_called_once_with(failure, sink)
        for route, handler in handlers.items():
            if route != DispatchRoute.VALIDATION:
                handler.assert_not_called()
        assert sink.severities == [Severity.WARNING]
        assert "VALIDATION_ERROR" in sink.texts[0]

    def test_server_matched_by_network_handler(self, dispatcher, handlers):
        failure = ServerException("boom", status_code=500)

        dispatcher.dispatch(failure)

        handlers[DispatchRoute.NETWORK].assert_called_once()
        handlers[DispatchRoute.APPLICATION].assert_not_called()

    def test_unknown_value_goes_to_generic_handler(self, dispatcher, sink, handlers):
        raw = RuntimeError("kaboom")

        dispatcher.dispatch(raw)

        handlers[DispatchRoute.UNKNOWN].assert_called_once_with(raw, sink)
        for route, handler in handlers.items():
            if route != DispatchRoute.UNKNOWN:
                handler.assert_not_called()
        assert sink.severities == [Severity.ERROR]
        assert "kaboom" in sink.texts[0]

    def test_non_exception_value_does_not_raise(self, dispatcher, handlers):
        dispatcher.dispatch({"unexpected": "payload"})
        handlers[DispatchRoute.UNKNOWN].assert_called_once()

    def test_explicit_trace_is_logged(self, dispatcher, sink):
        dispatcher.dispatch(AuthException("Not authorized"), trace="frame-a\nframe-b")
        assert sink.entries[0][2] == "frame-a\nframe-b"

    def test_raised_failure_trace_is_logged(self, dispatcher, sink):
        try:
            raise DatabaseException("Deadlock")
        except DatabaseException as e:
            dispatcher.dispatch(e)

        assert "test_raised_failure_trace_is_logged" in sink.entries[0][2]

    def test_missing_trace_is_absent(self, dispatcher, sink):
        dispatcher.dispatch(AuthException("Not authorized"))
        assert sink.entries[0][2] is None

    def test_same_failure_twice_gives_two_entries(self, dispatcher, sink, handlers):
        failure = ConnectionException("refused")

        dispatcher.dispatch(failure)
        dispatcher.dispatch(failure)

        assert len(sink.entries) == 2
        assert sink.entries[0] == sink.entries[1]
        assert handlers[DispatchRoute.NETWORK].call_count == 2
        assert failure.message == "refused"


class TestDefaultHandlers:
    """Default handlers emit kind-appropriate lines."""

    @pytest.fixture
    def sink(self):
        return RecordingSink()

    @pytest.fixture
    def dispatcher(self, sink):
        return ErrorDispatcher(sink)

    def test_recognized_kinds_log_warning_only(self, dispatcher, sink):
        for failure in create_sample_failures().values():
            dispatcher.dispatch(failure)

        assert len(sink.entries) == 2 * len(ErrorKind)
        assert set(sink.severities) == {Severity.WARNING}

    def test_validation_handler_lists_fields(self, dispatcher, sink):
        dispatcher.dispatch(ValidationException("x", field_errors={"email": "required"}))
        assert sink.texts[1] == "Validation failed: x | fields: email=required"

    def test_network_handler_reports_status(self, dispatcher, sink):
        dispatcher.dispatch(ServerException("boom", status_code=500))
        assert "status=500" in sink.texts[1]
        assert "SERVER_ERROR" in sink.texts[1]

    def test_unknown_handler_logs_error(self, dispatcher, sink):
        dispatcher.dispatch(KeyError("token"))
        assert sink.severities == [Severity.ERROR, Severity.ERROR]
        assert sink.texts[1].startswith("Unhandled failure: KeyError")


class TestHandlerFailures:
    """A handler that raises is logged, never propagated."""

    def test_crashing_handler_is_contained(self):
        sink = RecordingSink()

        def broken(failure, sink):
            raise RuntimeError("handler bug")

        dispatcher = ErrorDispatcher(sink, handlers={DispatchRoute.AUTH: broken})

        dispatcher.dispatch(AuthException("Not authorized"))

        assert sink.severities == [Severity.WARNING, Severity.ERROR]
        assert "Handler for route 'auth' failed" in sink.texts[1]
        assert "handler bug" in sink.texts[1]
        assert sink.entries[1][2] is not None

    def test_other_routes_unaffected(self):
        sink = RecordingSink()

        def broken(failure, sink):
            raise RuntimeError("handler bug")

        dispatcher = ErrorDispatcher(sink, handlers={DispatchRoute.AUTH: broken})
        dispatcher.dispatch(ApplicationException("fine"))

        assert sink.severities == [Severity.WARNING, Severity.WARNING]


class TestConcurrentDispatch:
    """Concurrent dispatches never mix up their entries."""

    def test_threads(self):
        sink = RecordingSink()
        dispatcher = ErrorDispatcher(sink)
        failures = [ApplicationException(f"failure-{i}", trace=f"trace-{i}") for i in range(50)]

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(dispatcher.dispatch, failures))

        summaries = [entry for entry in sink.entries if entry[1].startswith("Dispatching")]
        assert len(summaries) == 50
        for _, text, trace in summaries:
            index = text.rsplit("failure-", 1)[1]
            assert trace == f"trace-{index}"

    @pytest.mark.asyncio
    async def test_tasks(self):
        sink = RecordingSink()
        dispatcher = ErrorDispatcher(sink)

        async def worker(i):
            await asyncio.sleep(0)
            try:
                raise ServerException(f"task-{i}", status_code=500)
            except ServerException as e:
                dispatcher.dispatch(e)

        await asyncio.gather(*(worker(i) for i in range(20)))

        handler_lines = [text for text in sink.texts if text.startswith("Network failure")]
        assert sorted(handler_lines) == sorted(
            f"Network failure (Server) [SERVER_ERROR] status=500: task-{i}" for i in range(20)
        )


class TestLoggingSink:
    """The real sink emits one record per call."""

    def test_single_record_with_trace(self, caplog):
        logger = logging.getLogger("tests.errors")
        sink = ErrorLogSink(logger)

        with caplog.at_level(logging.WARNING, logger="tests.errors"):
            sink.log(Severity.WARNING, "Validation failed", "frame-1")

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert "Validation failed" in record.getMessage()
        assert "frame-1" in record.getMessage()
        assert record.severity == "warning"

    def test_dispatch_through_logger(self, caplog):
        logger = logging.getLogger("tests.dispatch")
        dispatcher = ErrorDispatcher(ErrorLogSink(logger))

        with caplog.at_level(logging.INFO, logger="tests.dispatch"):
            dispatcher.dispatch(ValueError("raw"))

        assert [r.levelno for r in caplog.records] == [logging.ERROR, logging.ERROR]
