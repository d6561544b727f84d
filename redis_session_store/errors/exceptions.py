"""
Exception classes for the session store.

`SessionStoreError` is the single base every store failure derives from.
Subclasses exist per error code so callers can catch the failure they care
about; the factory functions build them with default messages.

An absent session is never an exception: `load` returns None for it.
"""

from typing import Any, Optional

from redis_session_store.errors.codes import ErrorCode, get_default_status_code


class SessionStoreError(Exception):
    """
    Base exception class for all session store errors.

    This exception provides structured error information including:
    - error_code: A standardized error code from the ErrorCode enum
    - message: A human-readable error message
    - status_code: The HTTP status code the web layer should return
    - details: Optional additional context (never the session id)

    The underlying cause, when there is one, is chained with
    ``raise ... from exc`` and available as ``__cause__``.

    Example:
        raise SessionStoreError(
            error_code=ErrorCode.SESSION_STORE_UNAVAILABLE,
            message="Redis connection refused",
            details={"operation": "load"}
        )
    """

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None
    ):
        """
        Initialize a SessionStoreError.

        Args:
            error_code: The error code from the ErrorCode enum
            message: A human-readable error message
            status_code: The HTTP status code (defaults to the error code's default)
            details: Optional dictionary with additional error context
        """
        self.error_code = error_code
        self.message = message
        self.status_code = status_code or get_default_status_code(error_code)
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the exception to a dictionary for JSON serialization.

        Returns:
            Dictionary containing error_code, message, and details
        """
        result = {
            "error_code": self.error_code.value,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(error_code={self.error_code.value!r}, "
            f"message={self.message!r}, status_code={self.status_code}, "
            f"details={self.details!r})"
        )


class InvalidSessionIdError(SessionStoreError):
    """Raised when a session id cannot be turned into a storage key."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(ErrorCode.INVALID_SESSION_ID, message, details=details)


class SessionStoreUnavailableError(SessionStoreError):
    """Raised for any Redis communication failure (network, timeout, protocol)."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(ErrorCode.SESSION_STORE_UNAVAILABLE, message, details=details)


class SessionSerializationError(SessionStoreError):
    """Raised when a session record cannot be encoded for storage."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(ErrorCode.SESSION_SERIALIZATION_FAILED, message, details=details)


class SessionDeserializationError(SessionStoreError):
    """Raised when a stored payload is corrupt or does not match the record schema."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(ErrorCode.SESSION_DESERIALIZATION_FAILED, message, details=details)


# Convenience factory functions for common error types

def invalid_session_id(
    message: str = "Session id must be a non-empty string",
    details: Optional[dict[str, Any]] = None
) -> InvalidSessionIdError:
    """Create an invalid session id exception."""
    return InvalidSessionIdError(message, details=details)


def session_store_unavailable(
    message: str = "Session store unavailable",
    details: Optional[dict[str, Any]] = None
) -> SessionStoreUnavailableError:
    """Create a session store unavailable exception."""
    return SessionStoreUnavailableError(message, details=details)


def serialization_failed(
    message: str = "Session data could not be serialized",
    details: Optional[dict[str, Any]] = None
) -> SessionSerializationError:
    """Create a serialization failure exception."""
    return SessionSerializationError(message, details=details)


def deserialization_failed(
    message: str = "Stored session payload could not be deserialized",
    details: Optional[dict[str, Any]] = None
) -> SessionDeserializationError:
    """Create a deserialization failure exception."""
    return SessionDeserializationError(message, details=details)
