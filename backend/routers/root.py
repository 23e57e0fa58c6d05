"""
Root router for basic system information.
"""
from fastapi import APIRouter

from core.exceptions import DEFAULT_CODES
from .base import BaseRouter


class RootRouter(BaseRouter):
    """Router for root endpoints."""

    def get_router(self) -> APIRouter:
        """Get root router."""
        router = APIRouter(tags=["root"])

        @router.get("/")
        async def root():
            """Root endpoint with system information."""
            return {
                "message": "Failure Dispatch Service is running",
                "failure_kinds": {kind.value: code for kind, code in DEFAULT_CODES.items()},
                "endpoints": [
                    "/health/",
                    "/fetch",
                    "/fetch/retry",
                    "/fetch/page",
                    "/users/validate"
                ]
            }

        return router
