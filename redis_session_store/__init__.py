"""
Redis-backed session store.

Stores, loads and expires session records in Redis for a web-serving
layer::

    import redis.asyncio as redis
    from redis_session_store import RedisSessionStore, Session

    store = RedisSessionStore(redis.from_url("redis://127.0.0.1:6379/0"))
    session = Session()
    session.insert("user_id", 42)
    await store.save(session)
    loaded = await store.load(session.id)
"""

from redis_session_store.errors import (
    ErrorCode,
    InvalidSessionIdError,
    SessionDeserializationError,
    SessionSerializationError,
    SessionStoreError,
    SessionStoreUnavailableError,
)
from redis_session_store.session import (
    DEFAULT_KEY_PREFIX,
    RedisSessionStore,
    Session,
    SessionStore,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_KEY_PREFIX",
    "ErrorCode",
    "InvalidSessionIdError",
    "RedisSessionStore",
    "Session",
    "SessionDeserializationError",
    "SessionSerializationError",
    "SessionStore",
    "SessionStoreError",
    "SessionStoreUnavailableError",
]
