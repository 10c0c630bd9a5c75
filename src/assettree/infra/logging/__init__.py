from __future__ import annotations

from .config import BUILD_LOG_NAME, LoggingConfig
from .core import (
    configure_logging,
    get_logger,
    shutdown_logging,
)

__all__ = [
    "BUILD_LOG_NAME",
    "LoggingConfig",
    "configure_logging",
    "get_logger",
    "shutdown_logging",
]
