"""
Health and status router.
"""
from fastapi import APIRouter

from config import Settings
from schema.base import HealthCheckResponse
from .base import BaseRouter


class HealthRouter(BaseRouter):
    """Router for health and status endpoints."""

    def get_router(self) -> APIRouter:
        """Get health router."""
        router = APIRouter(prefix="/health", tags=["health"])

        @router.get("/", response_model=HealthCheckResponse)
        async def health_check():
            """Health check endpoint."""
            container = self.check_container()
            settings = container.get(Settings)
            return HealthCheckResponse(
                message="Service is healthy",
                version=settings.app_version,
                environment=settings.environment.value,
                services=container.get_all_services()
            )

        return router
