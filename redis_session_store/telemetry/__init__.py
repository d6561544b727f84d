"""
Telemetry module for structured logging.

This module provides:
- JSONFormatter for structured JSON log output
- configure_logging to install it on the package logger
"""

from redis_session_store.telemetry.logging_config import (
    JSONFormatter,
    configure_logging,
)

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
