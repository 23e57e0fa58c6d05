"""
Middleware for handling failures at the HTTP boundary.

This module provides:
- Exception handling middleware forwarding failures to the dispatcher
- HTTP status code mapping for each failure kind
- Conversion of FastAPI request validation errors into the taxonomy
"""

import uuid
from typing import Callable, Optional
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from config.logging_config import get_api_logger
from schema.base import ErrorResponse
from .dispatcher import ErrorDispatcher
from .exceptions import AppException, ErrorKind, ValidationException

logger = get_api_logger()

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTH: 401,
    ErrorKind.NETWORK: 502,
    ErrorKind.SERVER: 502,
    ErrorKind.CONNECTION: 503,
    ErrorKind.TIMEOUT: 504,
    ErrorKind.DATABASE: 503,
    ErrorKind.APPLICATION: 500,
}

UNEXPECTED_MESSAGE = "An unexpected error occurred"


def status_code_for(failure: object) -> int:
    """Map a failure to the HTTP status returned to the client."""
    if isinstance(failure, AppException):
        return STATUS_BY_KIND.get(failure.kind, 500)
    return 500


def build_error_response(
    failure: object,
    trace_id: Optional[str] = None,
    path: Optional[str] = None,
    include_trace: bool = False,
    status_code: Optional[int] = None
) -> JSONResponse:
    """Render a failure as the standardized error payload."""
    if isinstance(failure, AppException):
        details = failure.to_dict()
        payload = ErrorResponse(
            message=failure.message,
            kind=details["kind"],
            family=details["family"],
            code=failure.code,
            status_code=details.get("status_code"),
            field_errors=details.get("field_errors"),
            trace_id=trace_id,
            path=path,
            trace=failure.trace if include_trace else None
        )
    else:
        payload = ErrorResponse(
            message=UNEXPECTED_MESSAGE,
            kind=ErrorKind.APPLICATION.value,
            trace_id=trace_id,
            path=path
        )

    return JSONResponse(
        status_code=status_code or status_code_for(failure),
        content=payload.model_dump(mode="json")
    )


class ExceptionHandlingMiddleware(BaseHTTPMiddleware):
    """Request-scoped boundary: every uncaught failure is dispatched, then rendered."""

    def __init__(self, app, dispatcher: ErrorDispatcher, include_trace: bool = False):
        super().__init__(app)
        self.dispatcher = dispatcher
        self.include_trace = include_trace

    async def dispatch(self, request: Request, call_next):
        # Generate trace ID for request tracking
        trace_id = str(uuid.uuid4())
        request.state.trace_id = trace_id

        try:
            return await call_next(request)
        except Exception as e:
            self.dispatcher.dispatch(e, e.__traceback__)
            status_code = status_code_for(e)
            logger.info(
                f"Request failed: {request.method} {request.url.path} -> {status_code}",
                extra={
                    'trace_id': trace_id,
                    'path': request.url.path,
                    'method': request.method,
                    'status_code': status_code
                }
            )
            return build_error_response(
                e,
                trace_id=trace_id,
                path=request.url.path,
                include_trace=self.include_trace
            )


def convert_request_validation_error(error: RequestValidationError) -> ValidationException:
    """Convert a FastAPI validation error into a ValidationException."""
    field_errors = {}
    for item in error.errors():
        loc = [str(part) for part in item.get('loc', ())]
        field_path = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
        field_errors[field_path or "request"] = item.get('msg', "invalid")

    return ValidationException("Request validation failed", field_errors=field_errors)


def make_request_validation_handler(dispatcher: ErrorDispatcher, include_trace: bool = False) -> Callable:
    """Build the FastAPI exception handler for RequestValidationError."""

    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        failure = convert_request_validation_error(exc)
        dispatcher.dispatch(failure)
        return build_error_response(
            failure,
            trace_id=getattr(request.state, 'trace_id', None),
            path=request.url.path,
            include_trace=include_trace,
            status_code=422
        )

    return handle_request_validation
