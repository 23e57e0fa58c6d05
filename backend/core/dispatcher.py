"""
Centralized dispatcher for otherwise-unhandled failures.

This module provides:
- Route classification over the closed set of failure kinds
- Default per-route handlers
- ErrorDispatcher, the single terminal sink for failures at a boundary
"""

from enum import Enum
from typing import Callable, Dict, Mapping, Optional

from config.logging_config import ErrorLogSink, Severity
from .exceptions import (
    AppException,
    ErrorFamily,
    ErrorKind,
    TraceLike,
    ValidationException,
    NetworkException,
    describe_failure,
    format_trace
)


class DispatchRoute(str, Enum):
    """Handler routes, in matching priority order."""
    VALIDATION = "validation"
    AUTH = "auth"
    NETWORK = "network"
    APPLICATION = "application"
    UNKNOWN = "unknown"


Handler = Callable[[object, ErrorLogSink], None]


# Every kind must appear here; the dispatcher refuses to start otherwise.
KIND_ROUTES: Dict[ErrorKind, DispatchRoute] = {
    ErrorKind.VALIDATION: DispatchRoute.VALIDATION,
    ErrorKind.AUTH: DispatchRoute.AUTH,
    ErrorKind.NETWORK: DispatchRoute.NETWORK,
    ErrorKind.SERVER: DispatchRoute.NETWORK,
    ErrorKind.CONNECTION: DispatchRoute.NETWORK,
    ErrorKind.TIMEOUT: DispatchRoute.NETWORK,
    ErrorKind.DATABASE: DispatchRoute.APPLICATION,
    ErrorKind.APPLICATION: DispatchRoute.APPLICATION,
}


class HandlerError(Exception):
    """A route handler raised instead of logging."""

    def __init__(self, route: DispatchRoute, original_exception: BaseException):
        self.route = route
        self.original_exception = original_exception
        super().__init__(
            f"Handler for route '{route.value}' failed: {describe_failure(original_exception)}"
        )


def classify(failure: object) -> DispatchRoute:
    """Pick the route for a failure value; anything outside the taxonomy is UNKNOWN."""
    if not isinstance(failure, AppException):
        return DispatchRoute.UNKNOWN
    if failure.kind == ErrorKind.VALIDATION:
        return DispatchRoute.VALIDATION
    if failure.kind == ErrorKind.AUTH:
        return DispatchRoute.AUTH
    if failure.family == ErrorFamily.NETWORK:
        return DispatchRoute.NETWORK
    return KIND_ROUTES.get(failure.kind, DispatchRoute.UNKNOWN)


def severity_for(route: DispatchRoute) -> Severity:
    if route == DispatchRoute.UNKNOWN:
        return Severity.ERROR
    return Severity.WARNING


def handle_validation(failure: ValidationException, sink: ErrorLogSink) -> None:
    msg = f"Validation failed: {failure.message}"
    if failure.field_errors:
        fields = "; ".join(f"{name}={text}" for name, text in sorted(failure.field_errors.items()))
        msg += f" | fields: {fields}"
    sink.log(Severity.WARNING, msg)


def handle_auth(failure: AppException, sink: ErrorLogSink) -> None:
    sink.log(Severity.WARNING, f"Authentication required [{failure.code}]: {failure.message}")


def handle_network(failure: NetworkException, sink: ErrorLogSink) -> None:
    status = failure.status_code if failure.status_code is not None else "N/A"
    sink.log(
        Severity.WARNING,
        f"Network failure ({failure.kind.value}) [{failure.code}] status={status}: {failure.message}"
    )


def handle_application(failure: AppException, sink: ErrorLogSink) -> None:
    sink.log(Severity.WARNING, f"Application error [{failure.code or 'N/A'}]: {failure.message}")


def handle_unknown(failure: object, sink: ErrorLogSink) -> None:
    sink.log(Severity.ERROR, f"Unhandled failure: {describe_failure(failure)}")


DEFAULT_HANDLERS: Dict[DispatchRoute, Handler] = {
    DispatchRoute.VALIDATION: handle_validation,
    DispatchRoute.AUTH: handle_auth,
    DispatchRoute.NETWORK: handle_network,
    DispatchRoute.APPLICATION: handle_application,
    DispatchRoute.UNKNOWN: handle_unknown,
}


class ErrorDispatcher:
    """
    Terminal consumer of failures that reach a boundary.

    The dispatcher keeps no state between calls; the sink is the only
    collaborator that records anything.
    """

    def __init__(
        self,
        sink: ErrorLogSink,
        handlers: Optional[Mapping[DispatchRoute, Handler]] = None
    ):
        missing = [kind.value for kind in ErrorKind if kind not in KIND_ROUTES]
        if missing:
            raise ValueError(f"No dispatch route for kinds: {', '.join(missing)}")

        self.sink = sink
        merged = dict(DEFAULT_HANDLERS)
        if handlers:
            merged.update(handlers)
        self._handlers: Mapping[DispatchRoute, Handler] = merged

    def dispatch(self, failure: object, trace: TraceLike = None) -> None:
        """
        Log a failure and hand it to exactly one route handler.

        Args:
            failure: Any failure value, inside the taxonomy or not
            trace: Optional trace; defaults to the one carried by the failure
        """
        route = classify(failure)
        self.sink.log(severity_for(route), self._summary(failure, route), self._trace_text(failure, trace))

        handler = self._handlers[route]
        try:
            handler(failure, self.sink)
        except Exception as e:
            handler_error = HandlerError(route, e)
            self.sink.log(Severity.ERROR, str(handler_error), format_trace(e.__traceback__))

    @staticmethod
    def _summary(failure: object, route: DispatchRoute) -> str:
        if isinstance(failure, AppException):
            return (
                f"Dispatching {failure.kind.value} failure "
                f"(code={failure.code or 'N/A'}, route={route.value}): {failure.message}"
            )
        return f"Dispatching unrecognized failure (route={route.value}): {describe_failure(failure)}"

    @staticmethod
    def _trace_text(failure: object, trace: TraceLike) -> Optional[str]:
        text = format_trace(trace)
        if text is not None:
            return text
        if isinstance(failure, AppException):
            return failure.trace
        if isinstance(failure, BaseException):
            return format_trace(failure.__traceback__)
        return None
