"""RBAC configuration: settings and logging."""

from .settings import RbacSettings
from .logging_config import (
    LoggingConfig,
    LogLevel,
    LogVerbosity,
    LogFormat,
    setup_logging,
    get_logger,
)

__all__ = [
    "RbacSettings",
    "LoggingConfig",
    "LogLevel",
    "LogVerbosity",
    "LogFormat",
    "setup_logging",
    "get_logger",
]
