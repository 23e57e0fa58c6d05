"""
Base schema classes for the Failure Dispatch Service.

This module provides:
- Base request/response models
- The standardized error payload rendered at the HTTP boundary
- Health check response
"""

from datetime import datetime, timezone
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_assignment=True,
        extra="forbid"
    )


class BaseRequest(BaseSchema):
    """Base request schema."""
    trace_id: Optional[str] = Field(None, description="Request trace ID for debugging")

    model_config = ConfigDict(extra="allow")


class BaseResponse(BaseSchema):
    """Base response schema."""
    success: bool = Field(True, description="Whether the request was successful")
    message: str = Field("", description="Response message")
    trace_id: Optional[str] = Field(None, description="Request trace ID")
    timestamp: datetime = Field(default_factory=utc_now, description="Response timestamp")


class HealthCheckResponse(BaseResponse):
    """Health check response schema."""
    status: str = Field("healthy", description="Service status")
    version: str = Field("", description="Application version")
    environment: str = Field("", description="Environment name")
    services: Dict[str, str] = Field(default_factory=dict, description="Registered services")


class ErrorResponse(BaseResponse):
    """Error payload rendered for a failure at the HTTP boundary."""
    success: bool = Field(False, description="Always false for errors")
    kind: str = Field(..., description="Failure kind")
    family: Optional[str] = Field(None, description="Failure family, if any")
    code: Optional[str] = Field(None, description="Stable failure code")
    status_code: Optional[int] = Field(None, description="Upstream status carried by network failures")
    field_errors: Optional[Dict[str, str]] = Field(None, description="Per-field validation messages")
    path: Optional[str] = Field(None, description="Request path")
    trace: Optional[str] = Field(None, description="Failure trace, only when enabled")
