"""
Test utilities and helper functions.
"""

from typing import Any, Dict, Optional


def assert_error_payload(
    payload: Dict[str, Any],
    kind: str,
    code: Optional[str],
    message: Optional[str] = None
) -> None:
    """Assert that an HTTP error payload describes the expected failure."""
    assert payload["success"] is False
    assert payload["kind"] == kind
    assert payload["code"] == code
    assert payload["trace_id"]
    if message is not None:
        assert payload["message"] == message
