"""Database adapter interface.

Query logic for memories, rooms and accounts belongs to the runtime engine;
the orchestrator only needs an adapter that can be initialized, closed,
and used as the backing store of an agent's cache.
"""

from abc import ABC, abstractmethod
from uuid import UUID

CACHE_TABLE = "cache"


class DatabaseAdapter(ABC):
    """A persistence backend owned by exactly one agent runtime."""

    @abstractmethod
    async def init(self) -> None:
        """Open the backend and create missing tables. Must precede any use.

        Raises:
            StoreConnectionError: If the backend cannot be reached or prepared
        """

    @abstractmethod
    async def close(self) -> None:
        """Release connections. Safe to call on an uninitialized adapter."""

    @abstractmethod
    async def get_cache(self, key: str, agent_id: UUID) -> str | None:
        """Return the raw cached value for (key, agent_id), or None."""

    @abstractmethod
    async def set_cache(self, key: str, agent_id: UUID, value: str) -> bool:
        """Insert or replace the cached value for (key, agent_id)."""

    @abstractmethod
    async def delete_cache(self, key: str, agent_id: UUID) -> bool:
        """Delete the cached value; returns whether a row was removed."""

    @property
    @abstractmethod
    def is_initialized(self) -> bool:
        """Whether init() has completed."""
