"""
Logging configuration for the Failure Dispatch Service.
Provides the logging setup and the error log sink consumed by the dispatcher.
"""
import logging
import logging.config
import os
import sys
from enum import Enum
from pathlib import Path
from datetime import datetime
from typing import Dict, Any, Optional


class Severity(str, Enum):
    """Severities accepted by the error log sink."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def level(self) -> int:
        return _SEVERITY_LEVELS[self]


_SEVERITY_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


def get_log_directory(log_dir: Optional[str] = None) -> str:
    """Get the logs directory path, defaulting to the project root's logs directory."""
    if log_dir:
        directory = Path(log_dir)
    else:
        directory = Path(__file__).parent.parent.parent / "logs"
    directory.mkdir(parents=True, exist_ok=True)
    return str(directory)


def get_logging_config(log_file: bool = True, log_dir: Optional[str] = None) -> Dict[str, Any]:
    """Get logging configuration dictionary."""
    config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "simple": {
                "format": "%(asctime)s | %(levelname)-8s | %(message)s",
                "datefmt": "%H:%M:%S"
            },
            "failure": {
                "format": "%(asctime)s | FAILURE | %(levelname)-8s | %(message)s",
                "datefmt": "%H:%M:%S"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "simple",
                "stream": sys.stdout
            }
        },
        "loggers": {
            "": {  # Root logger
                "level": "INFO",
                "handlers": ["console"]
            },
            "errors": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False
            },
            "api": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False
            },
            "factories": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False
            },
            "uvicorn": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    if not log_file:
        return config

    log_dir = get_log_directory(log_dir)
    # Create timestamped log files
    timestamp = datetime.now().strftime("%Y%m%d")

    config["handlers"].update({
        "file_all": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": os.path.join(log_dir, f"app_{timestamp}.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8"
        },
        "file_failures": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "INFO",
            "formatter": "failure",
            "filename": os.path.join(log_dir, f"failures_{timestamp}.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 10,
            "encoding": "utf8"
        },
        "file_api": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "INFO",
            "formatter": "detailed",
            "filename": os.path.join(log_dir, f"api_{timestamp}.log"),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
            "encoding": "utf8"
        }
    })
    loggers = config["loggers"]
    loggers[""]["handlers"].append("file_all")
    loggers["errors"]["handlers"].append("file_failures")
    loggers["api"]["handlers"].append("file_api")
    loggers["factories"]["handlers"].append("file_all")
    loggers["uvicorn"]["handlers"].append("file_api")
    return config


def setup_logging(log_level: str = "INFO", log_file: bool = True, log_dir: Optional[str] = None) -> None:
    """Setup logging configuration for the application."""
    config = get_logging_config(log_file=log_file, log_dir=log_dir)

    # Adjust log level if specified
    level = getattr(log_level, "value", log_level).upper()
    if level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
        config["loggers"][""]["level"] = level
        config["loggers"]["errors"]["level"] = level

    # Apply configuration
    logging.config.dictConfig(config)

    # Log startup message
    logger = logging.getLogger("app")
    logger.info("=" * 60)
    logger.info("🚀 Failure Dispatch Service - Logging Initialized")
    logger.info(f"📝 Log Level: {level}")
    if log_file:
        logger.info(f"📁 Log Directory: {get_log_directory(log_dir)}")
    logger.info("=" * 60)


def get_error_logger() -> logging.Logger:
    """Get logger that receives dispatched failures."""
    return logging.getLogger("errors")


def get_api_logger() -> logging.Logger:
    """Get logger specifically for API operations."""
    return logging.getLogger("api")


def get_factory_logger() -> logging.Logger:
    """Get logger specifically for factory operations."""
    return logging.getLogger("factories")


class ErrorLogSink:
    """
    Logging seam for failures.

    Every call produces exactly one log record carrying the text and, when
    present, the trace, so records from concurrent callers never interleave.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_error_logger()

    def log(self, severity: Severity, text: str, trace: Optional[str] = None) -> None:
        """Emit one record at the given severity."""
        severity = Severity(severity)
        msg = text
        if trace:
            msg += f"\nTrace:\n{trace.rstrip()}"
        self.logger.log(
            severity.level,
            msg,
            extra={"severity": severity.value, "has_trace": bool(trace)}
        )


# Export convenience functions
__all__ = [
    "Severity",
    "ErrorLogSink",
    "setup_logging",
    "get_error_logger",
    "get_api_logger",
    "get_factory_logger"
]
