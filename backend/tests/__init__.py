"""
Test infrastructure for the Failure Dispatch Service.

This module provides:
- Recording sinks and scripted transports
- Sample failures and test settings
- Assertion helpers for error payloads
"""

from .fixtures import *
from .utils import *
from .mocks import *

__all__ = [
    "create_sample_failures",
    "create_test_settings",
    "create_test_client",
    "RecordingSink",
    "ScriptedTransport",
    "assert_error_payload"
]
