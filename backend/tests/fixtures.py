"""
Test fixtures for generating test data.
"""

from typing import Dict, Optional

from fastapi.testclient import TestClient

from app_factory import create_app
from config import FetchSettings, Settings, Environment, ErrorLogSink
from core.exceptions import (
    AppException,
    ErrorKind,
    ValidationException,
    NetworkException,
    ServerException,
    ConnectionException,
    TimeoutException,
    AuthException,
    DatabaseException,
    ApplicationException
)
from factories.base import Transport


def create_sample_failures() -> Dict[ErrorKind, AppException]:
    """One failure per kind, built without explicit codes."""
    return {
        ErrorKind.VALIDATION: ValidationException("Invalid form", field_errors={"email": "required"}),
        ErrorKind.NETWORK: NetworkException("Bad gateway", status_code=502),
        ErrorKind.SERVER: ServerException("Upstream exploded", status_code=500),
        ErrorKind.CONNECTION: ConnectionException("Host unreachable"),
        ErrorKind.TIMEOUT: TimeoutException("Too slow", timeout_seconds=1.5),
        ErrorKind.AUTH: AuthException("Not authorized"),
        ErrorKind.DATABASE: DatabaseException("Deadlock detected"),
        ErrorKind.APPLICATION: ApplicationException("Something broke"),
    }


def create_test_settings(**fetch_overrides) -> Settings:
    """Create settings suitable for tests: no log files, short timeouts."""
    fetch_values = {"request_timeout": 0.05, "max_retries": 2, "retry_delay": 0.0}
    fetch_values.update(fetch_overrides)
    return Settings(
        environment=Environment.TESTING,
        debug=True,
        log_file=False,
        fetch=FetchSettings(**fetch_values)
    )


def create_test_client(
    sink: ErrorLogSink,
    transport: Optional[Transport] = None,
    settings: Optional[Settings] = None
) -> TestClient:
    """Create a TestClient around a fully wired app without touching logging config."""
    app = create_app(
        settings=settings or create_test_settings(),
        sink=sink,
        transport=transport,
        configure_logging=False
    )
    return TestClient(app)
