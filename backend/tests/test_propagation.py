"""
Unit tests for the propagation rule.
"""

import asyncio

import pytest

from core.exceptions import (
    ApplicationException,
    ErrorKind,
    ServerException,
    ValidationException
)
from core.propagation import (
    is_known_failure,
    normalize_error,
    owns_failures,
    propagation_boundary
)


def load_profile(user_id: str):
    if not user_id:
        raise ValidationException("User id required", field_errors={"user_id": "required"})
    raise OSError("disk unplugged")


@owns_failures("profile lookup")
def owning_operation(user_id: str):
    return load_profile(user_id)


class TestPropagation:
    """Known failures pass through unchanged."""

    def test_validation_passes_unchanged(self):
        original = ValidationException("User id required", field_errors={"user_id": "required"})

        with pytest.raises(ValidationException) as exc_info:
            with propagation_boundary("outer"):
                raise original

        assert exc_info.value is original
        assert exc_info.value.code == "VALIDATION_ERROR"
        assert dict(exc_info.value.field_errors) == {"user_id": "required"}

    def test_decorated_operation_keeps_kind(self):
        with pytest.raises(ValidationException) as exc_info:
            owning_operation("")

        assert exc_info.value.kind == ErrorKind.VALIDATION
        assert exc_info.value.message == "User id required"

    def test_nested_boundaries_never_downgrade(self):
        failure = ServerException("boom", status_code=500)

        with pytest.raises(ServerException) as exc_info:
            with propagation_boundary("outer"):
                with propagation_boundary("inner"):
                    raise failure

        assert exc_info.value is failure

    def test_cancellation_is_not_wrapped(self):
        with pytest.raises(asyncio.CancelledError):
            with propagation_boundary("task"):
                raise asyncio.CancelledError()


class TestNormalization:
    """Unknown failures become Application failures."""

    def test_unknown_failure_wrapped(self):
        with pytest.raises(ApplicationException) as exc_info:
            owning_operation("user-1")

        failure = exc_info.value
        assert failure.kind == ErrorKind.APPLICATION
        assert failure.code is None
        assert "disk unplugged" in failure.message
        assert "profile lookup" in failure.message
        assert isinstance(failure.__cause__, OSError)
        assert isinstance(failure.original_exception, OSError)

    def test_normalize_returns_known_unchanged(self):
        failure = ServerException("boom", status_code=500)
        assert normalize_error(failure) is failure

    def test_normalize_embeds_text(self):
        failure = normalize_error(KeyError("token"))
        assert "KeyError" in failure.message
        assert "token" in failure.message

    def test_is_known_failure(self):
        assert is_known_failure(ValidationException("x"))
        assert not is_known_failure(ValueError("x"))
        assert not is_known_failure("x")

    @pytest.mark.asyncio
    async def test_async_operation_wrapped(self):
        @owns_failures()
        async def flaky():
            await asyncio.sleep(0)
            raise ZeroDivisionError("division by zero")

        with pytest.raises(ApplicationException) as exc_info:
            await flaky()

        assert "division by zero" in exc_info.value.message
        assert "flaky" in exc_info.value.message
