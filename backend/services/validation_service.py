"""
Validation Service for input validation and business rules.
"""

from typing import Dict
from schema import RegistrationRequest
from core.exceptions import ValidationException
import re


class ValidationService:
    """Service for input validation and business rule enforcement."""

    def __init__(self, min_password_length: int = 8):
        self.username_pattern = re.compile(r'^[a-zA-Z0-9_-]{3,30}$')
        self.email_pattern = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
        self.min_password_length = min_password_length

    def validate_registration(self, request: RegistrationRequest) -> RegistrationRequest:
        """Validate a registration form, raising one failure with every field problem."""
        errors: Dict[str, str] = {}

        username_error = self._check_username(request.username)
        if username_error:
            errors["username"] = username_error

        email_error = self._check_email(request.email)
        if email_error:
            errors["email"] = email_error

        password_error = self._check_password(request.password)
        if password_error:
            errors["password"] = password_error

        if errors:
            raise ValidationException("Registration data is invalid", field_errors=errors)

        return RegistrationRequest(
            username=request.username.strip(),
            email=request.email.strip().lower(),
            password=request.password,
            trace_id=request.trace_id
        )

    def _check_username(self, username) -> str:
        if not username or not username.strip():
            return "required"
        if not self.username_pattern.match(username.strip()):
            return "3-30 letters, digits, '_' or '-'"
        return ""

    def _check_email(self, email) -> str:
        if not email or not email.strip():
            return "required"
        if not self.email_pattern.match(email.strip()):
            return "invalid format"
        return ""

    def _check_password(self, password) -> str:
        if not password:
            return "required"
        if len(password) < self.min_password_length:
            return f"must be at least {self.min_password_length} characters"
        return ""
