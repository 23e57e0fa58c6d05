"""
Configuration management system for the Failure Dispatch Service.

This module provides:
- Environment-specific configuration (dev/staging/prod/testing)
- Pydantic-based settings validation
- Centralized configuration access
"""

import os
from enum import Enum
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Environment(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Available log levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class FetchSettings(BaseSettings):
    """Settings for the remote data fetch operation."""

    require_https: bool = Field(default=True, description="Reject URLs that do not use HTTPS")
    request_timeout: float = Field(default=5.0, description="Transport timeout in seconds")
    max_retries: int = Field(default=2, description="Retries for retryable server failures")
    retry_status_codes: List[int] = Field(default=[500], description="Server statuses worth retrying")
    retry_delay: float = Field(default=0.0, description="Delay between retries in seconds")

    @field_validator('request_timeout')
    def validate_request_timeout(cls, v):
        if v <= 0:
            raise ValueError('Request timeout must be positive')
        return v

    @field_validator('max_retries')
    def validate_max_retries(cls, v):
        if v < 0 or v > 10:
            raise ValueError('Max retries must be between 0 and 10')
        return v

    @field_validator('retry_delay')
    def validate_retry_delay(cls, v):
        if v < 0:
            raise ValueError('Retry delay cannot be negative')
        return v

    model_config = {
        "env_prefix": "FETCH_"
    }


class Settings(BaseSettings):
    """Main application settings."""

    # Application settings
    app_name: str = Field(default="Failure Dispatch Service", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(default=Environment.DEVELOPMENT, description="Application environment")
    debug: bool = Field(default=True, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # Logging settings
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Log level")
    log_file: bool = Field(default=True, description="Enable file logging")
    log_dir: Optional[str] = Field(default=None, description="Directory for log files; defaults to <project root>/logs")

    # Error responses
    include_trace_in_response: bool = Field(default=False, description="Expose failure traces in error payloads")

    # Sub-configurations
    fetch: FetchSettings = Field(default_factory=FetchSettings)

    @field_validator('environment', mode='before')
    def validate_environment(cls, v):
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @field_validator('log_level', mode='before')
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"  # Allow extra environment variables to be ignored
    }


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    return Settings()


# Environment-specific configurations
def get_development_settings() -> Settings:
    """Get development-specific settings."""
    return Settings(
        environment=Environment.DEVELOPMENT,
        debug=True,
        log_level=LogLevel.DEBUG,
        include_trace_in_response=True
    )


def get_production_settings() -> Settings:
    """Get production-specific settings."""
    return Settings(
        environment=Environment.PRODUCTION,
        debug=False,
        log_level=LogLevel.INFO,
        include_trace_in_response=False,
        fetch=FetchSettings(require_https=True, max_retries=3)
    )


def get_testing_settings() -> Settings:
    """Get testing-specific settings."""
    return Settings(
        environment=Environment.TESTING,
        debug=True,
        log_level=LogLevel.DEBUG,
        log_file=False,
        fetch=FetchSettings(request_timeout=0.05, max_retries=2, retry_delay=0.0)
    )


# Configuration factory
def create_settings(environment: Optional[str] = None) -> Settings:
    """Create settings based on environment."""
    env = Environment((environment or os.getenv("ENVIRONMENT", Environment.DEVELOPMENT.value)).lower())

    if env == Environment.DEVELOPMENT:
        return get_development_settings()
    elif env == Environment.PRODUCTION:
        return get_production_settings()
    elif env == Environment.TESTING:
        return get_testing_settings()
    else:
        return get_settings()
