"""
Schema module for the Failure Dispatch Service.

Usage:
    from schema import FetchResult, ErrorResponse
    from schema.base import BaseRequest, BaseResponse
"""

# Base schemas and common utilities
from .base import (
    BaseSchema,
    BaseRequest,
    BaseResponse,
    HealthCheckResponse,
    ErrorResponse
)

# Fetch schemas
from .fetch import (
    FetchResult,
    FetchResponse
)

# User schemas
from .users import (
    RegistrationRequest,
    RegistrationResponse
)

__all__ = [
    "BaseSchema",
    "BaseRequest",
    "BaseResponse",
    "HealthCheckResponse",
    "ErrorResponse",
    "FetchResult",
    "FetchResponse",
    "RegistrationRequest",
    "RegistrationResponse"
]
