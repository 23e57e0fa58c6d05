"""
Application factory for managing FastAPI app creation and service wiring.
"""
from typing import List, Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from dotenv import load_dotenv

# Core infrastructure imports
from config import ErrorLogSink, Settings, get_settings, setup_logging, get_factory_logger
from core.container import ServiceContainer, build_container
from core.dispatcher import ErrorDispatcher
from core.middleware import ExceptionHandlingMiddleware, make_request_validation_handler
from factories.base import Transport

# Router imports
from routers.base import BaseRouter
from routers.root import RootRouter
from routers.health import HealthRouter
from routers.fetch import FetchRouter
from routers.users import UsersRouter


class AppFactory:
    """Factory for creating and configuring the FastAPI application."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings
        self.container: Optional[ServiceContainer] = None
        self.routers: List[BaseRouter] = []
        self.logger = get_factory_logger()

    def initialize_logging(self):
        """Initialize logging system."""
        self.settings = self.settings or get_settings()
        setup_logging(self.settings.log_level, log_file=self.settings.log_file, log_dir=self.settings.log_dir)
        self.logger = get_factory_logger()

    def initialize_container(self, sink: Optional[ErrorLogSink] = None, transport: Optional[Transport] = None):
        """Initialize dependency injection container."""
        self.settings = self.settings or get_settings()
        self.logger.info("🔧 Initializing dependency injection container...")
        self.container = build_container(self.settings, sink=sink, transport=transport)

        services = self.container.get_all_services()
        self.logger.info(f"✅ Container initialized with {len(services)} services")
        for service_name, service_type in services.items():
            self.logger.debug(f"  - {service_name}: {service_type}")

    def initialize_routers(self):
        """Initialize all routers with the service container."""
        self.logger.info("🛠️ Initializing routers...")

        self.routers = [
            RootRouter(),
            HealthRouter(),
            FetchRouter(),
            UsersRouter()
        ]
        for router in self.routers:
            router.set_container(self.container)

        self.logger.info(f"✅ {len(self.routers)} routers initialized")

    def create_middleware(self, app: FastAPI):
        """Add failure boundaries to the FastAPI application."""
        self.logger.info("🔧 Setting up middleware...")

        dispatcher = self.container.get(ErrorDispatcher)
        include_trace = self.settings.include_trace_in_response

        app.add_middleware(
            ExceptionHandlingMiddleware,
            dispatcher=dispatcher,
            include_trace=include_trace
        )
        app.add_exception_handler(
            RequestValidationError,
            make_request_validation_handler(dispatcher, include_trace)
        )
        self.logger.info("✅ Exception handling middleware added")

    def register_routes(self, app: FastAPI):
        """Register all routes with the FastAPI application."""
        self.logger.info("🛣️ Registering routes...")

        for router in self.routers:
            app.include_router(router.get_router())
            self.logger.info(f"✅ {router.__class__.__name__} routes registered")

        self.logger.info("🎯 All routes registered successfully!")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    app_factory: AppFactory = app.state.app_factory
    logger = app_factory.logger
    logger.info("🚀 Application startup completed!")

    yield

    logger.info("🛑 Application shutdown initiated...")
    if app_factory.container is not None:
        app_factory.container.clear_singletons()
        logger.info("✅ Container cleaned up")
    logger.info("👋 Application shutdown completed!")


def create_app(
    settings: Optional[Settings] = None,
    sink: Optional[ErrorLogSink] = None,
    transport: Optional[Transport] = None,
    configure_logging: bool = True
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings
        sink: Error log sink handed to the dispatcher
        transport: Transport used by the fetch service
        configure_logging: Apply the logging configuration

    Returns:
        Configured FastAPI application
    """
    # Load environment variables
    load_dotenv()

    app_factory = AppFactory(settings)
    if configure_logging:
        app_factory.initialize_logging()
    settings = app_factory.settings or get_settings()
    app_factory.settings = settings

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Closed failure taxonomy with centralized dispatch",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        debug=settings.debug
    )

    app_factory.initialize_container(sink=sink, transport=transport)
    app_factory.initialize_routers()
    app_factory.create_middleware(app)
    app_factory.register_routes(app)

    # Store factory in app state
    app.state.app_factory = app_factory
    app.state.container = app_factory.container

    logger = app_factory.logger
    logger.info("🎉 FastAPI application created successfully!")
    logger.info(f"📋 App configuration:")
    logger.info(f"  - Name: {settings.app_name}")
    logger.info(f"  - Version: {settings.app_version}")
    logger.info(f"  - Environment: {settings.environment.value}")
    logger.info(f"  - Routers: {len(app_factory.routers)}")

    return app
