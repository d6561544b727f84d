"""
Unit tests for the error catalog and exception classes.
"""

import pytest

from redis_session_store.errors import (
    ErrorCode,
    InvalidSessionIdError,
    SessionDeserializationError,
    SessionSerializationError,
    SessionStoreError,
    SessionStoreUnavailableError,
    deserialization_failed,
    get_default_status_code,
    invalid_session_id,
    serialization_failed,
    session_store_unavailable,
)


class TestErrorCodes:
    """Tests for the error code catalog."""

    @pytest.mark.parametrize("code,status", [
        (ErrorCode.INVALID_SESSION_ID, 400),
        (ErrorCode.SESSION_STORE_UNAVAILABLE, 503),
        (ErrorCode.SESSION_SERIALIZATION_FAILED, 500),
        (ErrorCode.SESSION_DESERIALIZATION_FAILED, 500),
    ])
    def test_default_status_codes(self, code, status):
        assert get_default_status_code(code) == status

    def test_codes_are_strings(self):
        assert ErrorCode.SESSION_STORE_UNAVAILABLE == "SESSION_STORE_UNAVAILABLE"


class TestSessionStoreError:
    """Tests for the base exception."""

    def test_fields(self):
        error = SessionStoreError(
            error_code=ErrorCode.SESSION_STORE_UNAVAILABLE,
            message="Redis down",
            details={"operation": "load"},
        )

        assert error.error_code == ErrorCode.SESSION_STORE_UNAVAILABLE
        assert error.message == "Redis down"
        assert error.status_code == 503
        assert error.details == {"operation": "load"}
        assert str(error) == "Redis down"

    def test_status_code_override(self):
        error = SessionStoreError(ErrorCode.SESSION_STORE_UNAVAILABLE, "x", status_code=504)

        assert error.status_code == 504

    def test_to_dict_omits_missing_details(self):
        error = SessionStoreError(ErrorCode.INVALID_SESSION_ID, "bad id")

        assert error.to_dict() == {"error_code": "INVALID_SESSION_ID", "message": "bad id"}

    def test_to_dict_includes_details(self):
        error = SessionStoreError(ErrorCode.INVALID_SESSION_ID, "bad id", details={"a": 1})

        assert error.to_dict()["details"] == {"a": 1}

    def test_repr_names_subclass(self):
        error = SessionStoreUnavailableError("down")

        assert repr(error).startswith("SessionStoreUnavailableError(error_code='SESSION_STORE_UNAVAILABLE'")


class TestFactories:
    """Tests for the factory functions."""

    @pytest.mark.parametrize("factory,cls,code", [
        (invalid_session_id, InvalidSessionIdError, ErrorCode.INVALID_SESSION_ID),
        (session_store_unavailable, SessionStoreUnavailableError,
         ErrorCode.SESSION_STORE_UNAVAILABLE),
        (serialization_failed, SessionSerializationError,
         ErrorCode.SESSION_SERIALIZATION_FAILED),
        (deserialization_failed, SessionDeserializationError,
         ErrorCode.SESSION_DESERIALIZATION_FAILED),
    ])
    def test_factory_builds_subclass(self, factory, cls, code):
        error = factory()

        assert isinstance(error, cls)
        assert isinstance(error, SessionStoreError)
        assert error.error_code == code
        assert error.message

    def test_factory_custom_message_and_details(self):
        error = session_store_unavailable("Timed out", details={"operation": "save"})

        assert error.message == "Timed out"
        assert error.details == {"operation": "save"}
