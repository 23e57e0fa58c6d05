"""
Schemas for user registration validation.
"""

from typing import Optional
from pydantic import Field

from .base import BaseRequest, BaseResponse


class RegistrationRequest(BaseRequest):
    """Raw registration form; checks happen in ValidationService."""
    username: Optional[str] = Field(None, description="Desired username")
    email: Optional[str] = Field(None, description="Contact email")
    password: Optional[str] = Field(None, description="Plain text password")


class RegistrationResponse(BaseResponse):
    """Outcome of a successful registration check."""
    username: str = Field(..., description="Normalized username")
    email: str = Field(..., description="Normalized email")
