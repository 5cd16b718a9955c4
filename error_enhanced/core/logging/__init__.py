"""Logging utilities."""

from error_enhanced.core.logging.config import LogConfig
from error_enhanced.core.logging.logger import (
    PROMOTED_KEYS,
    configure_logging,
    get_logger,
    log_context,
    logger,
)

__all__ = [
    "LogConfig",
    "PROMOTED_KEYS",
    "configure_logging",
    "get_logger",
    "log_context",
    "logger",
]
