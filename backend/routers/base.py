"""
Base router with common dependencies and utilities.
"""
from fastapi import APIRouter
from typing import Optional

from core.container import ServiceContainer
from core.exceptions import ApplicationException


class BaseRouter:
    """Base router class with common dependencies."""

    def __init__(self):
        self.container: Optional[ServiceContainer] = None

    def set_container(self, container: ServiceContainer):
        """Set the service container."""
        self.container = container

    def check_container(self) -> ServiceContainer:
        """Return the container, failing if it was never set."""
        if self.container is None:
            raise ApplicationException("Services not initialized", code="SERVICES_UNAVAILABLE")
        return self.container

    def get_router(self) -> APIRouter:
        """Get the router instance. Override in subclasses."""
        raise NotImplementedError("Subclasses must implement get_router")
