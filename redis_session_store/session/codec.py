"""
Session record codec.

Converts a `Session` to and from the JSON payload stored in Redis and
derives storage keys from session ids.

Payload format (keys sorted, compact separators):

    {"data":{...},"expiry":"2024-01-15T10:30:00+00:00","id":"..."}

`expiry` is an ISO 8601 UTC timestamp or null. Decoding is strict: a payload
that is not exactly this shape fails with `SessionDeserializationError`
rather than being coerced.
"""

import json
from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from redis_session_store.errors.exceptions import (
    deserialization_failed,
    invalid_session_id,
    serialization_failed,
)
from redis_session_store.session.record import Session

DEFAULT_KEY_PREFIX = "session:"

# Characters with special meaning in Redis glob-style patterns
_PATTERN_SPECIAL_CHARS = frozenset("*?[]\\")


class _StoredSession(BaseModel):
    """Payload schema; unlike Session, every field must be present."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    data: dict[str, Any]
    expiry: Optional[datetime]


def session_key(session_id: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Derive the Redis key for a session.

    Args:
        session_id: The session identifier.
        prefix: Namespace prepended to the id.

    Returns:
        ``prefix + session_id``

    Raises:
        InvalidSessionIdError: If the id is not a non-empty, UTF-8 encodable
            string.
    """
    if not isinstance(session_id, str) or not session_id or not _is_utf8(session_id):
        raise invalid_session_id()
    return f"{prefix}{session_id}"


def session_id_from_key(key: Union[str, bytes], prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Recover the session id from a key returned by a Redis scan."""
    if isinstance(key, bytes):
        key = key.decode("utf-8")
    if key.startswith(prefix):
        return key[len(prefix):]
    return key


def key_pattern(prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """
    Build the glob pattern matching every key under ``prefix``.

    Glob metacharacters inside the prefix are backslash-escaped so the
    pattern only matches keys that start with the literal prefix.
    """
    escaped = "".join(
        f"\\{char}" if char in _PATTERN_SPECIAL_CHARS else char
        for char in prefix
    )
    return f"{escaped}*"


def _is_utf8(text: str) -> bool:
    """False for strings holding lone surrogates, which JSON cannot carry."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _check_json_native(value: Any, path: str) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise serialization_failed(
                    f"Session data keys must be strings, got {type(key).__name__} at {path}",
                    details={"path": path},
                )
            if not _is_utf8(key):
                raise serialization_failed(
                    f"Session data key is not valid UTF-8 at {path}",
                    details={"path": path},
                )
            _check_json_native(item, f"{path}.{key}")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_json_native(item, f"{path}[{index}]")
    elif isinstance(value, str):
        if not _is_utf8(value):
            raise serialization_failed(
                f"Session string value is not valid UTF-8 at {path}",
                details={"path": path},
            )
    elif value is not None and not isinstance(value, (int, float)):
        raise serialization_failed(
            f"Unsupported session value type {type(value).__name__} at {path}",
            details={"path": path, "type": type(value).__name__},
        )


def serialize_session(session: Session) -> str:
    """
    Encode a session as a stable JSON string.

    Args:
        session: The session to encode.

    Returns:
        The JSON payload to store.

    Raises:
        SessionSerializationError: If the data holds values JSON cannot
            represent exactly (non-string keys, tuples, sets, NaN, objects,
            strings with lone surrogates).
    """
    if not _is_utf8(session.id):
        raise serialization_failed("Session id is not valid UTF-8", details={"path": "id"})
    _check_json_native(session.data, "data")
    document = {
        "id": session.id,
        "data": session.data,
        "expiry": session.expiry.isoformat() if session.expiry is not None else None,
    }
    try:
        return json.dumps(document, sort_keys=True, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise serialization_failed(details={"reason": str(e)}) from e


def deserialize_session(payload: Union[str, bytes]) -> Session:
    """
    Decode a stored payload back into a session.

    Args:
        payload: The raw value read from Redis.

    Returns:
        The reconstructed session.

    Raises:
        SessionDeserializationError: If the payload is not valid UTF-8 JSON
            or does not match the session schema.
    """
    if not isinstance(payload, (str, bytes, bytearray)):
        raise deserialization_failed(
            details={"reason": f"unexpected payload type {type(payload).__name__}"}
        )
    try:
        stored = _StoredSession.model_validate_json(payload, strict=True)
        return Session(id=stored.id, data=stored.data, expiry=stored.expiry)
    except ValidationError as e:
        # Input values are left out so stored data never leaks into errors
        problems = [
            f"{'.'.join(str(loc) for loc in error['loc']) or '<payload>'}: {error['msg']}"
            for error in e.errors(include_input=False, include_url=False)
        ]
        raise deserialization_failed(details={"errors": problems}) from e
