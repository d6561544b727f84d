"""
Session store abstraction.

This module defines the contract a web-serving layer relies on to persist
session records between requests. Implementations translate each operation
into commands against an external store; `RedisSessionStore` is the one
shipped with this package.
"""

from abc import ABC, abstractmethod
from typing import Optional

from redis_session_store.session.record import Session


class SessionStore(ABC):
    """
    Abstract base class for session storage implementations.

    All methods are async to support non-blocking I/O against the
    external store. Implementations hold no locks: concurrent writes to the
    same session resolve as last-writer-wins in the backing store.
    """

    @abstractmethod
    async def load(self, session_id: str) -> Optional[Session]:
        """
        Load a session by id.

        Args:
            session_id: Unique identifier for the session.

        Returns:
            The stored session, or None if it does not exist or has expired.

        Raises:
            SessionDeserializationError: If the stored payload is corrupt.
            SessionStoreUnavailableError: If the store cannot be reached.
        """

    @abstractmethod
    async def save(self, session: Session) -> None:
        """
        Store a session, applying its expiry as the entry's TTL.

        A session without expiry is stored until deleted. A session whose
        expiry has already passed is removed instead of written.

        Raises:
            SessionSerializationError: If the session data cannot be encoded.
            SessionStoreUnavailableError: If the store cannot be reached.
        """

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """
        Delete a session by id.

        This operation is idempotent - deleting a non-existent
        session does not raise an error.

        Raises:
            SessionStoreUnavailableError: If the store cannot be reached.
        """

    @abstractmethod
    async def count(self) -> int:
        """Return the number of sessions currently stored."""

    @abstractmethod
    async def session_ids(self) -> list[str]:
        """Return the ids of all sessions currently stored."""

    @abstractmethod
    async def clear(self) -> int:
        """
        Delete every session in this store.

        Returns:
            The number of sessions removed.
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check connectivity and health of the session store.

        Returns:
            True if the store is healthy and accessible, False otherwise.

        Note:
            This method should not raise exceptions - connectivity issues
            should be caught and result in a False return value.
        """
