"""
Session record model.

A session is an opaque random id, a mapping of string keys to JSON-native
values, and an optional absolute expiry. The record is owned by the calling
framework; the store only persists it.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# 32 random bytes, url-safe base64 encoded (43 characters)
SESSION_ID_BYTES = 32


def generate_session_id() -> str:
    """Return a new random, unguessable session id."""
    return secrets.token_urlsafe(SESSION_ID_BYTES)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Session(BaseModel):
    """
    A user's session state persisted between requests.

    Attributes:
        id: Opaque session identifier, generated when not supplied
        data: Mapping of string keys to JSON-native values
        expiry: Absolute UTC instant after which the session is invalid,
            or None for a session that never expires on its own

    Example:
        session = Session()
        session.insert("user_id", 42)
        session.expire_in(timedelta(minutes=30))
        await store.save(session)
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=generate_session_id, min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)
    expiry: Optional[datetime] = None

    @field_validator("expiry")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Treat naive datetimes as UTC and normalize aware ones to UTC."""
        return _as_utc(v)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def insert(self, key: str, value: Any) -> None:
        self.data[key] = value

    def remove(self, key: str) -> Any:
        """Remove a key, returning its value or None if it was not set."""
        return self.data.pop(key, None)

    def clear(self) -> None:
        self.data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def expire_in(self, ttl: timedelta) -> None:
        """Set the expiry to ``ttl`` from now."""
        self.expiry = _utcnow() + ttl

    def set_expiry(self, expiry: Optional[datetime]) -> None:
        """Set an absolute expiry, or None to make the session persistent."""
        self.expiry = _as_utc(expiry)

    @property
    def expires_in(self) -> Optional[timedelta]:
        """
        Time remaining until expiry.

        Returns:
            None for a session without expiry, otherwise the remaining
            duration, which is zero or negative once the session has expired.
        """
        if self.expiry is None:
            return None
        return self.expiry - _utcnow()

    @property
    def is_expired(self) -> bool:
        remaining = self.expires_in
        return remaining is not None and remaining <= timedelta(0)

    def regenerate(self) -> None:
        """
        Assign a fresh id while keeping data and expiry.

        The caller is responsible for deleting the record stored under the
        previous id.
        """
        self.id = generate_session_id()
