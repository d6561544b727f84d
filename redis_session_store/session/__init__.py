"""
Session persistence for web-serving layers.

This module provides the session record model, the codec that turns
records into stored payloads, the abstract session store contract and its
Redis implementation.
"""

from redis_session_store.session.record import Session, generate_session_id
from redis_session_store.session.codec import (
    DEFAULT_KEY_PREFIX,
    deserialize_session,
    key_pattern,
    serialize_session,
    session_id_from_key,
    session_key,
)
from redis_session_store.session.store import SessionStore
from redis_session_store.session.redis_store import RedisSessionStore

__all__ = [
    "Session",
    "generate_session_id",
    "DEFAULT_KEY_PREFIX",
    "serialize_session",
    "deserialize_session",
    "session_key",
    "session_id_from_key",
    "key_pattern",
    "SessionStore",
    "RedisSessionStore",
]
