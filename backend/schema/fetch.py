"""
Schemas for the remote data fetch operation.
"""

from typing import Any, Dict
from pydantic import Field

from .base import BaseResponse, BaseSchema


class FetchResult(BaseSchema):
    """Successful outcome of fetching a remote resource."""
    status: str = Field("success", description="Outcome marker")
    url: str = Field(..., description="Fetched URL")
    status_code: int = Field(200, description="Upstream status code")
    payload: Dict[str, Any] = Field(default_factory=dict, description="Decoded response body")
    attempts: int = Field(1, ge=1, description="Transport attempts used")


class FetchResponse(BaseResponse):
    """HTTP response wrapping a fetch result."""
    result: FetchResult = Field(..., description="Fetch result")
