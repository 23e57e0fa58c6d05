"""
Configuration module for the Failure Dispatch Service.

This module provides centralized configuration management with:
- Environment-specific settings
- Type-safe configuration
- Logging setup and the error log sink
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    FetchSettings,
    get_settings,
    create_settings,
    get_development_settings,
    get_production_settings,
    get_testing_settings
)

from .logging_config import (
    Severity,
    ErrorLogSink,
    setup_logging,
    get_error_logger,
    get_api_logger,
    get_factory_logger
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "FetchSettings",
    "get_settings",
    "create_settings",
    "get_development_settings",
    "get_production_settings",
    "get_testing_settings",
    "Severity",
    "ErrorLogSink",
    "setup_logging",
    "get_error_logger",
    "get_api_logger",
    "get_factory_logger"
]
