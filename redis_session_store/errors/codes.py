"""
Error code catalog for the session store.

Every failure the store raises carries one of these codes so the calling
web layer can map it to a response without inspecting exception types.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """
    Enumeration of all error codes raised by the session store.

    - Client errors (4xx): the caller handed the store bad input
    - Dependency errors (5xx): Redis could not be reached or answered badly
    - Data errors (5xx): a record could not be encoded or decoded
    """

    INVALID_SESSION_ID = "INVALID_SESSION_ID"
    """Session id is empty or not a string (HTTP 400)"""

    SESSION_STORE_UNAVAILABLE = "SESSION_STORE_UNAVAILABLE"
    """Redis connection, timeout or protocol failure (HTTP 503)"""

    SESSION_SERIALIZATION_FAILED = "SESSION_SERIALIZATION_FAILED"
    """Session data holds values that cannot be stored (HTTP 500)"""

    SESSION_DESERIALIZATION_FAILED = "SESSION_DESERIALIZATION_FAILED"
    """Stored payload is corrupt or schema-incompatible (HTTP 500)"""


# Mapping of error codes to their default HTTP status codes
ERROR_CODE_STATUS_MAP: dict[ErrorCode, int] = {
    ErrorCode.INVALID_SESSION_ID: 400,
    ErrorCode.SESSION_STORE_UNAVAILABLE: 503,
    ErrorCode.SESSION_SERIALIZATION_FAILED: 500,
    ErrorCode.SESSION_DESERIALIZATION_FAILED: 500,
}


def get_default_status_code(error_code: ErrorCode) -> int:
    """
    Get the default HTTP status code for an error code.

    Args:
        error_code: The error code to look up

    Returns:
        The default HTTP status code for the error code
    """
    return ERROR_CODE_STATUS_MAP.get(error_code, 500)
