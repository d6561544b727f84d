"""
Shared pytest fixtures and configuration for all tests.
"""
import os
import re
from datetime import timedelta
from typing import Any, AsyncIterator, Optional
from unittest.mock import MagicMock, AsyncMock

import pytest
from hypothesis import settings, Verbosity, Phase

from redis_session_store.session.record import Session
from redis_session_store.session.redis_store import RedisSessionStore

# Default profile: balanced for local development
settings.register_profile(
    "default",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None,
    print_blob=True,
)

# CI profile: more thorough and reproducible
settings.register_profile(
    "ci",
    max_examples=200,
    verbosity=Verbosity.verbose,
    deadline=None,
    print_blob=True,
    derandomize=True,
)

# Debug profile: minimal examples for quick debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
    print_blob=True,
    phases=[Phase.explicit, Phase.reuse, Phase.generate],
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


def _glob_to_regex(pattern: str) -> re.Pattern:
    """Translate a Redis glob pattern (with backslash escapes) to a regex."""
    parts = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\" and i + 1 < len(pattern):
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
        i += 1
    return re.compile("".join(parts), re.DOTALL)


class FakeRedis:
    """
    In-memory stand-in for the redis.asyncio commands the store issues.

    Values are returned as bytes, as a client without decode_responses
    does. Expiry is driven by ``advance`` rather than wall-clock time.
    """

    def __init__(self):
        self.now = 0.0
        self.closed = False
        self._values: dict[str, tuple[Any, Optional[float]]] = {}

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def _live(self, key: str) -> Optional[Any]:
        entry = self._values.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= self.now:
            del self._values[key]
            return None
        return value

    def put_raw(self, key: str, value: Any) -> None:
        self._values[key] = (value, None)

    async def get(self, key: str) -> Optional[bytes]:
        value = self._live(key)
        if value is None:
            return None
        return value.encode("utf-8") if isinstance(value, str) else value

    async def set(self, key: str, value: Any, ex: Optional[int] = None,
                  px: Optional[int] = None) -> bool:
        expires_at = None
        if ex is not None:
            expires_at = self.now + ex
        elif px is not None:
            expires_at = self.now + px / 1000
        self._values[key] = (value, expires_at)
        return True

    async def delete(self, *keys: Any) -> int:
        removed = 0
        for key in keys:
            if isinstance(key, bytes):
                key = key.decode("utf-8")
            if self._live(key) is not None:
                del self._values[key]
                removed += 1
        return removed

    async def pttl(self, key: str) -> int:
        if self._live(key) is None:
            return -2
        expires_at = self._values[key][1]
        if expires_at is None:
            return -1
        return int((expires_at - self.now) * 1000)

    async def scan_iter(self, match: Optional[str] = None, count: Optional[int] = None
                        ) -> AsyncIterator[bytes]:
        regex = _glob_to_regex(match or "*")
        for key in list(self._values):
            if self._live(key) is not None and regex.fullmatch(key):
                yield key.encode("utf-8")

    async def ping(self) -> bool:
        return True

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Create an in-memory Redis double with a manual clock."""
    return FakeRedis()


@pytest.fixture
def store(fake_redis: FakeRedis) -> RedisSessionStore:
    """Create a session store over the in-memory Redis double."""
    return RedisSessionStore(fake_redis)


@pytest.fixture
def mock_redis() -> MagicMock:
    """Create a mock Redis client for failure injection."""
    mock = MagicMock()
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.delete = AsyncMock(return_value=1)
    mock.ping = AsyncMock(return_value=True)
    mock.aclose = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def sample_session() -> Session:
    """Sample session with nested data and a 30 minute expiry."""
    session = Session(data={
        "user_id": 42,
        "roles": ["admin", "editor"],
        "cart": {"items": [{"sku": "A-1", "qty": 2}], "total": 19.5},
        "flash": None,
        "remember_me": True,
    })
    session.expire_in(timedelta(minutes=30))
    return session
