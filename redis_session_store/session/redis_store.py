"""
Redis-based session store implementation.

This module provides a Redis-backed implementation of the SessionStore
interface. The Redis client is injected, so several stores (with different
key prefixes) can share one connection pool and tests can substitute their
own client.

Each session is stored as a single string value:

    SET <prefix><session id> <json payload> [PX <ttl ms>]
"""

import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Optional

from redis.exceptions import RedisError

from redis_session_store.errors.exceptions import (
    deserialization_failed,
    session_store_unavailable,
)
from redis_session_store.session.codec import (
    DEFAULT_KEY_PREFIX,
    deserialize_session,
    key_pattern,
    serialize_session,
    session_id_from_key,
    session_key,
)
from redis_session_store.session.record import Session
from redis_session_store.session.store import SessionStore

if TYPE_CHECKING:
    from redis_session_store.config.settings import Settings

logger = logging.getLogger(__name__)

# Keys deleted per DEL command when clearing the store
CLEAR_BATCH_SIZE = 500


def _ttl_milliseconds(ttl: timedelta) -> int:
    return max(1, math.ceil(ttl.total_seconds() * 1000))


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    """Raise every Redis client failure as SessionStoreUnavailableError."""
    try:
        yield
    except (RedisError, OSError) as e:
        raise session_store_unavailable(
            f"Session store {operation} failed: {e}",
            details={"operation": operation, "cause": type(e).__name__},
        ) from e


class RedisSessionStore(SessionStore):
    """
    Redis-backed session store implementation.

    Sessions are stored as JSON strings under ``prefix + session id``.
    A session's expiry becomes the key's TTL, so Redis itself removes
    expired sessions; sessions without expiry persist until deleted.

    No retries are performed here. Connection pooling, reconnects and
    socket timeouts are the client's responsibility.

    Attributes:
        client: The redis.asyncio client commands are issued on
        prefix: Namespace prepended to every session id
    """

    def __init__(
        self,
        client: Any,
        prefix: str = DEFAULT_KEY_PREFIX,
        owns_client: bool = False
    ):
        """
        Initialize the Redis session store.

        Args:
            client: A ``redis.asyncio.Redis`` instance (or compatible).
            prefix: Key namespace for this store's sessions.
            owns_client: Whether disconnect() should close the client.
        """
        self.client = client
        self._prefix = prefix
        self._owns_client = owns_client

    @classmethod
    def from_url(
        cls,
        redis_url: str,
        prefix: str = DEFAULT_KEY_PREFIX,
        **client_kwargs: Any
    ) -> "RedisSessionStore":
        """
        Create a store with its own client for ``redis_url``.

        Extra keyword arguments are passed to ``redis.asyncio.from_url``.
        The store owns the client and closes it on disconnect().
        """
        import redis.asyncio as redis
        client = redis.from_url(redis_url, **client_kwargs)
        return cls(client, prefix=prefix, owns_client=True)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RedisSessionStore":
        """Create a store from the loaded settings."""
        client_kwargs: dict[str, Any] = {}
        if settings.redis_socket_timeout is not None:
            client_kwargs["socket_timeout"] = settings.redis_socket_timeout
        return cls.from_url(
            settings.effective_redis_url,
            prefix=settings.session_key_prefix,
            **client_kwargs
        )

    def with_prefix(self, prefix: str) -> "RedisSessionStore":
        """
        Return a store sharing this store's client under another namespace.

        The returned store never closes the shared client.
        """
        return RedisSessionStore(self.client, prefix=prefix)

    @property
    def prefix(self) -> str:
        return self._prefix

    def key_for(self, session_id: str) -> str:
        """Return the Redis key a session id is stored under."""
        return session_key(session_id, self._prefix)

    def _connected(self, operation: str) -> Any:
        """Return the client, or fail if disconnect() already closed it."""
        if self.client is None:
            raise session_store_unavailable(
                "Session store is disconnected",
                details={"operation": operation, "cause": "disconnected"},
            )
        return self.client

    async def disconnect(self) -> None:
        """
        Close the Redis connection if this store created it.

        Injected clients are left open for their owner to close.
        """
        if self._owns_client and self.client is not None:
            await self.client.aclose()
            self.client = None

    async def load(self, session_id: str) -> Optional[Session]:
        key = self.key_for(session_id)
        client = self._connected("load")
        with _translate_errors("load"):
            payload = await client.get(key)

        if payload is None:
            return None

        session = deserialize_session(payload)
        if session.id != session_id:
            raise deserialization_failed(
                "Stored session id does not match the requested id",
                details={"reason": "id mismatch"},
            )

        # Redis may not have evicted the key yet
        if session.is_expired:
            return None

        return session

    async def save(self, session: Session) -> None:
        payload = serialize_session(session)
        key = self.key_for(session.id)
        client = self._connected("save")
        expires_in = session.expires_in

        if expires_in is not None and expires_in <= timedelta(0):
            with _translate_errors("save"):
                await client.delete(key)
            logger.debug("Expired session removed instead of saved")
            return

        with _translate_errors("save"):
            if expires_in is None:
                await client.set(key, payload)
            else:
                await client.set(key, payload, px=_ttl_milliseconds(expires_in))

        logger.debug(
            "Session saved",
            extra={"extra_data": {
                "bytes": len(payload),
                "ttl_seconds": expires_in.total_seconds() if expires_in is not None else None,
            }}
        )

    async def delete(self, session_id: str) -> None:
        key = self.key_for(session_id)
        client = self._connected("delete")
        with _translate_errors("delete"):
            await client.delete(key)

    async def _scan_keys(self, operation: str) -> list[Any]:
        keys: list[Any] = []
        client = self._connected(operation)
        with _translate_errors(operation):
            async for key in client.scan_iter(match=key_pattern(self._prefix)):
                keys.append(key)
        return keys

    async def count(self) -> int:
        return len(await self._scan_keys("count"))

    async def session_ids(self) -> list[str]:
        keys = await self._scan_keys("session_ids")
        return [session_id_from_key(key, self._prefix) for key in keys]

    async def clear(self) -> int:
        """
        Delete every session under this store's prefix.

        Keys are collected with SCAN before deletion, so sessions written
        while the clear is running may survive it.

        Returns:
            The number of keys Redis reported as deleted.
        """
        keys = await self._scan_keys("clear")
        client = self._connected("clear")
        removed = 0
        with _translate_errors("clear"):
            for start in range(0, len(keys), CLEAR_BATCH_SIZE):
                removed += await client.delete(*keys[start:start + CLEAR_BATCH_SIZE])

        logger.info(
            "Session store cleared",
            extra={"extra_data": {"prefix": self._prefix, "removed": removed}}
        )
        return removed

    async def health_check(self) -> bool:
        """
        Check connectivity and health of the Redis store.

        Returns:
            True if Redis answers PING, False otherwise, including when
            the store is disconnected or the check itself fails.
        """
        if self.client is None:
            return False

        try:
            result = await self.client.ping()
            return result is True
        except Exception:
            return False
