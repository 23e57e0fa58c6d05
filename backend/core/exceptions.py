"""
Failure taxonomy for the Failure Dispatch Service.

This module provides:
- The closed set of failure kinds and the network family
- Exception classes carrying a message, a stable code and optional context
- Default codes per kind
- Stable textual rendering for logs
"""

from enum import Enum
from types import MappingProxyType, TracebackType
from typing import Any, Dict, Mapping, Optional, Union
import traceback


class ErrorKind(str, Enum):
    """Closed set of failure kinds."""
    VALIDATION = "Validation"
    NETWORK = "Network"
    SERVER = "Server"
    CONNECTION = "Connection"
    TIMEOUT = "Timeout"
    AUTH = "Auth"
    DATABASE = "Database"
    APPLICATION = "Application"


class ErrorFamily(str, Enum):
    """Families grouping specialized kinds."""
    NETWORK = "Network"


DEFAULT_CODES: Dict[ErrorKind, Optional[str]] = {
    ErrorKind.NETWORK: "NETWORK_ERROR",
    ErrorKind.SERVER: "SERVER_ERROR",
    ErrorKind.CONNECTION: "CONNECTION_ERROR",
    ErrorKind.TIMEOUT: "TIMEOUT_ERROR",
    ErrorKind.AUTH: "AUTH_ERROR",
    ErrorKind.DATABASE: "DB_ERROR",
    ErrorKind.VALIDATION: "VALIDATION_ERROR",
    ErrorKind.APPLICATION: None,
}

NETWORK_KINDS = frozenset({
    ErrorKind.NETWORK,
    ErrorKind.SERVER,
    ErrorKind.CONNECTION,
    ErrorKind.TIMEOUT,
})

ABSENT = "N/A"

TraceLike = Union[str, TracebackType, traceback.StackSummary, None]


def format_trace(trace: TraceLike) -> Optional[str]:
    """Turn a traceback object, stack summary or string into text."""
    if trace is None:
        return None
    if isinstance(trace, str):
        return trace or None
    if isinstance(trace, TracebackType):
        return "".join(traceback.format_tb(trace)) or None
    if isinstance(trace, traceback.StackSummary):
        return "".join(trace.format()) or None
    return str(trace)


def family_of(kind: ErrorKind) -> Optional[ErrorFamily]:
    """Return the family a kind belongs to, if any."""
    if kind in NETWORK_KINDS:
        return ErrorFamily.NETWORK
    return None


def _rebuild_failure(cls: type, kwargs: Dict[str, Any]) -> "AppException":
    return cls(**kwargs)


class AppException(Exception):
    """
    Base class for every failure kind.

    Instances are immutable once constructed. The interpreter still manages
    ``__traceback__``, ``__cause__`` and ``__context__`` so the value can be
    raised and chained.
    """

    kind: ErrorKind = ErrorKind.APPLICATION

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        trace: TraceLike = None
    ):
        if not message:
            raise ValueError("Failure message must be a non-empty string")

        super().__init__(message)
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "code", code if code is not None else DEFAULT_CODES[self.kind])
        object.__setattr__(self, "_explicit_trace", format_trace(trace))
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("__") or not getattr(self, "_frozen", False):
            object.__setattr__(self, name, value)
            return
        raise AttributeError(f"{type(self).__name__} is immutable; cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        if name.startswith("__"):
            object.__delattr__(self, name)
            return
        raise AttributeError(f"{type(self).__name__} is immutable; cannot delete '{name}'")

    def _init_kwargs(self) -> Dict[str, Any]:
        """Constructor keywords that rebuild an equal failure."""
        return {"message": self.message, "code": self.code, "trace": self._explicit_trace}

    def __reduce__(self):
        return (_rebuild_failure, (type(self), self._init_kwargs()))

    @property
    def family(self) -> Optional[ErrorFamily]:
        return family_of(self.kind)

    @property
    def trace(self) -> Optional[str]:
        """Explicit trace if one was supplied, else the traceback captured on raise."""
        if self._explicit_trace is not None:
            return self._explicit_trace
        return format_trace(self.__traceback__)

    def _identity(self):
        return (self.kind, self.code, self.message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppException):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, code={self.code!r}, message={self.message!r})"

    def render(self) -> str:
        """Stable textual form for logs."""
        return f"{self.kind.value}: {self.code or ABSENT} - {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Structured view of the failure for payloads."""
        return {
            "kind": self.kind.value,
            "family": self.family.value if self.family else None,
            "code": self.code,
            "message": self.message,
        }


class ValidationException(AppException):
    """Input did not satisfy an operation's contract."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        field_errors: Optional[Mapping[str, str]] = None,
        code: Optional[str] = None,
        trace: TraceLike = None
    ):
        super().__init__(message, code=code, trace=trace)
        frozen_fields = MappingProxyType(dict(field_errors)) if field_errors else None
        object.__setattr__(self, "field_errors", frozen_fields)

    def _init_kwargs(self) -> Dict[str, Any]:
        kwargs = super()._init_kwargs()
        kwargs["field_errors"] = dict(self.field_errors) if self.field_errors else None
        return kwargs

    def render(self) -> str:
        rendered = super().render()
        if self.field_errors:
            breakdown = ", ".join(f"{field}: {msg}" for field, msg in sorted(self.field_errors.items()))
            rendered += f" [{breakdown}]"
        return rendered

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["field_errors"] = dict(self.field_errors) if self.field_errors else None
        return result


class NetworkException(AppException):
    """Failure talking to a remote peer."""

    kind = ErrorKind.NETWORK

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        trace: TraceLike = None
    ):
        super().__init__(message, code=code, trace=trace)
        object.__setattr__(self, "status_code", status_code)

    def _init_kwargs(self) -> Dict[str, Any]:
        kwargs = super()._init_kwargs()
        kwargs["status_code"] = self.status_code
        return kwargs

    def render(self) -> str:
        status = self.status_code if self.status_code is not None else ABSENT
        return f"{super().render()} (Status: {status})"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        return result


class ServerException(NetworkException):
    """The remote peer answered with a server-side failure status."""

    kind = ErrorKind.SERVER

    def __init__(
        self,
        message: str,
        status_code: int,
        code: Optional[str] = None,
        trace: TraceLike = None
    ):
        if status_code is None:
            raise ValueError("ServerException requires a status code")
        super().__init__(message, status_code=status_code, code=code, trace=trace)


class ConnectionException(NetworkException):
    """No connection could be established; there is never a status."""

    kind = ErrorKind.CONNECTION

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        trace: TraceLike = None
    ):
        super().__init__(message, status_code=None, code=code, trace=trace)

    def _init_kwargs(self) -> Dict[str, Any]:
        kwargs = super()._init_kwargs()
        del kwargs["status_code"]
        return kwargs


class TimeoutException(NetworkException):
    """The remote peer did not answer in time."""

    kind = ErrorKind.TIMEOUT

    def __init__(
        self,
        message: str,
        timeout_seconds: Optional[float] = None,
        code: Optional[str] = None,
        trace: TraceLike = None
    ):
        super().__init__(message, status_code=None, code=code, trace=trace)
        object.__setattr__(self, "timeout_seconds", timeout_seconds)

    def _init_kwargs(self) -> Dict[str, Any]:
        kwargs = super()._init_kwargs()
        del kwargs["status_code"]
        kwargs["timeout_seconds"] = self.timeout_seconds
        return kwargs


class AuthException(AppException):
    """Caller is not authenticated or not authorized."""

    kind = ErrorKind.AUTH


class DatabaseException(AppException):
    """Storage layer failure."""

    kind = ErrorKind.DATABASE


class ApplicationException(AppException):
    """Fallback kind, also used to normalize failures from outside the taxonomy."""

    kind = ErrorKind.APPLICATION

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        trace: TraceLike = None,
        original_exception: Optional[BaseException] = None
    ):
        super().__init__(message, code=code, trace=trace)
        object.__setattr__(self, "original_exception", original_exception)

    def _init_kwargs(self) -> Dict[str, Any]:
        kwargs = super()._init_kwargs()
        kwargs["original_exception"] = self.original_exception
        return kwargs


EXCEPTION_TYPES: Dict[ErrorKind, type] = {
    ErrorKind.VALIDATION: ValidationException,
    ErrorKind.NETWORK: NetworkException,
    ErrorKind.SERVER: ServerException,
    ErrorKind.CONNECTION: ConnectionException,
    ErrorKind.TIMEOUT: TimeoutException,
    ErrorKind.AUTH: AuthException,
    ErrorKind.DATABASE: DatabaseException,
    ErrorKind.APPLICATION: ApplicationException,
}


def describe_failure(failure: object) -> str:
    """Textual form of any failure value, inside the taxonomy or not."""
    if isinstance(failure, AppException):
        return failure.render()
    if isinstance(failure, BaseException):
        text = str(failure) or repr(failure)
        return f"{type(failure).__name__}: {text}"
    return f"{type(failure).__name__}: {failure!r}"
