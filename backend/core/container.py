"""
Dependency Injection Container for the Failure Dispatch Service.

This module provides:
- Centralized dependency management
- Singleton and transient service registration
- The default wiring: settings -> sink -> dispatcher -> services
"""

from typing import Dict, Any, Optional, TypeVar, Type, Callable
import logging

from config import Settings, ErrorLogSink, get_settings
from factories.base import Transport
from factories.transport_factory import DefaultTransportFactory
from services import DataFetchService, ValidationService
from .boundary import FailureBoundary
from .dispatcher import ErrorDispatcher

logger = logging.getLogger('container')

T = TypeVar('T')


class ServiceContainer:
    """
    Dependency injection container for managing services and their dependencies.

    This container:
    - Manages service instances and lifecycles
    - Supports singleton and transient services
    """

    def __init__(self):
        """Initialize the service container."""
        self._services: Dict[str, Callable] = {}
        self._factories: Dict[str, Callable] = {}
        self._singletons: Dict[str, Any] = {}

    def register_singleton(self, service_type: Type[T], factory: Callable[[], T], name: Optional[str] = None):
        """
        Register a singleton service.

        Args:
            service_type: Service class type
            factory: Factory function to create the service
            name: Optional service name (defaults to class name)
        """
        service_name = name or service_type.__name__
        self._factories[service_name] = factory
        logger.debug(f"Registered singleton service: {service_name}")

    def register_transient(self, service_type: Type[T], factory: Callable[[], T], name: Optional[str] = None):
        """Register a transient service (new instance each time)."""
        service_name = name or service_type.__name__
        self._services[service_name] = factory
        logger.debug(f"Registered transient service: {service_name}")

    def register_instance(self, service_type: Type[T], instance: T, name: Optional[str] = None):
        """Register an existing service instance."""
        service_name = name or service_type.__name__
        self._singletons[service_name] = instance
        logger.debug(f"Registered service instance: {service_name}")

    def get(self, service_type: Type[T], name: Optional[str] = None) -> T:
        """
        Get a service instance.

        Args:
            service_type: Service class type
            name: Optional service name (defaults to class name)

        Returns:
            Service instance

        Raises:
            ValueError: If service is not registered
        """
        service_name = name or service_type.__name__

        if service_name in self._singletons:
            return self._singletons[service_name]

        if service_name in self._factories:
            instance = self._factories[service_name]()
            self._singletons[service_name] = instance
            logger.debug(f"Created singleton service: {service_name}")
            return instance

        if service_name in self._services:
            instance = self._services[service_name]()
            logger.debug(f"Created transient service: {service_name}")
            return instance

        raise ValueError(f"Service {service_name} is not registered")

    def get_all_services(self) -> Dict[str, str]:
        """Get information about all registered services."""
        services = {}

        for name in self._singletons.keys():
            services[name] = "singleton (instantiated)"

        for name in self._factories.keys():
            if name not in self._singletons:
                services[name] = "singleton (factory)"

        for name in self._services.keys():
            services[name] = "transient"

        return services

    def clear_singletons(self):
        """
        Drop singletons built from a factory so the next lookup rebuilds them.

        Instances registered with register_instance have no factory and are kept.
        """
        for service_name in list(self._singletons):
            if service_name in self._factories:
                del self._singletons[service_name]
        logger.debug("Cleared factory-built singleton instances")


def build_container(
    settings: Optional[Settings] = None,
    sink: Optional[ErrorLogSink] = None,
    transport: Optional[Transport] = None
) -> ServiceContainer:
    """
    Build a container with the default services.

    The log sink is created once here and threaded into the dispatcher;
    nothing below reaches for a global logger to report failures.
    """
    container = ServiceContainer()
    settings = settings or get_settings()

    container.register_instance(Settings, settings)
    container.register_instance(ErrorLogSink, sink or ErrorLogSink())
    container.register_singleton(
        ErrorDispatcher,
        lambda: ErrorDispatcher(container.get(ErrorLogSink))
    )
    container.register_transient(
        FailureBoundary,
        lambda: FailureBoundary(container.get(ErrorDispatcher))
    )

    if transport is not None:
        container.register_instance(Transport, transport)
    else:
        container.register_singleton(
            Transport,
            lambda: DefaultTransportFactory().create_transport("simulated")
        )

    container.register_singleton(
        DataFetchService,
        lambda: DataFetchService(container.get(Transport), settings.fetch)
    )
    container.register_singleton(ValidationService, lambda: ValidationService())

    logger.info(f"Container built with {len(container.get_all_services())} services")
    return container
