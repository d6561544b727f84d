"""
Error handling module for the session store.

This module provides structured error handling with:
- ErrorCode enum for standardized error codes
- SessionStoreError and its subclasses, one per error code
- Factory functions for building errors with default messages
"""

from redis_session_store.errors.codes import ErrorCode, get_default_status_code
from redis_session_store.errors.exceptions import (
    InvalidSessionIdError,
    SessionDeserializationError,
    SessionSerializationError,
    SessionStoreError,
    SessionStoreUnavailableError,
    deserialization_failed,
    invalid_session_id,
    serialization_failed,
    session_store_unavailable,
)

__all__ = [
    "ErrorCode",
    "get_default_status_code",
    "SessionStoreError",
    "InvalidSessionIdError",
    "SessionStoreUnavailableError",
    "SessionSerializationError",
    "SessionDeserializationError",
    "invalid_session_id",
    "session_store_unavailable",
    "serialization_failed",
    "deserialization_failed",
]
