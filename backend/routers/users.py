"""
Users router for registration checks.
"""
from fastapi import APIRouter, Request

from schema.users import RegistrationRequest, RegistrationResponse
from services import ValidationService
from .base import BaseRouter


class UsersRouter(BaseRouter):
    """Router for user endpoints."""

    def get_router(self) -> APIRouter:
        """Get users router."""
        router = APIRouter(prefix="/users", tags=["users"])

        @router.post("/validate", response_model=RegistrationResponse)
        async def validate_registration(payload: RegistrationRequest, request: Request):
            """Validate a registration form; field problems come back as one failure."""
            service = self.check_container().get(ValidationService)
            cleaned = service.validate_registration(payload)
            return RegistrationResponse(
                message="Registration data is valid",
                trace_id=getattr(request.state, "trace_id", None),
                username=cleaned.username,
                email=cleaned.email
            )

        return router
