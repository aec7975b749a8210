"""Per-agent cache layered over a database adapter.

Entries live in the adapter's cache table keyed by (key, agent_id), so two
agents sharing one database never read each other's entries.

Value format:
    {"value": <any JSON>, "expires": <epoch milliseconds, 0 = never>}
"""

import json
import time
from typing import Any
from uuid import UUID

from troupe.observability.logging import get_logger
from troupe.storage.base import DatabaseAdapter
from troupe.storage.errors import StoreValidationError

logger = get_logger(__name__)


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


class DbCacheAdapter:
    """Binds a database adapter to one agent id."""

    def __init__(self, db: DatabaseAdapter, agent_id: UUID) -> None:
        self.db = db
        self.agent_id = agent_id

    async def get_cache(self, key: str) -> str | None:
        return await self.db.get_cache(key, self.agent_id)

    async def set_cache(self, key: str, value: str) -> bool:
        return await self.db.set_cache(key, self.agent_id, value)

    async def delete_cache(self, key: str) -> bool:
        return await self.db.delete_cache(key, self.agent_id)


class CacheManager:
    """JSON cache with optional expiry.

    Usage:
        cache = CacheManager(DbCacheAdapter(db, agent_id))
        await cache.set("profile", {"handle": "ada"}, expires=now_ms() + 60_000)
        profile = await cache.get("profile")
    """

    def __init__(self, adapter: DbCacheAdapter) -> None:
        self.adapter = adapter

    @property
    def agent_id(self) -> UUID:
        return self.adapter.agent_id

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing or expired."""
        raw = await self.adapter.get_cache(key)
        if raw is None:
            return None

        try:
            entry = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("cache_entry_corrupt", key=key, agent_id=str(self.agent_id))
            await self.adapter.delete_cache(key)
            return None

        expires = entry.get("expires") or 0
        if expires and expires <= now_ms():
            logger.debug("cache_entry_expired", key=key, agent_id=str(self.agent_id))
            await self.adapter.delete_cache(key)
            return None

        return entry.get("value")

    async def set(self, key: str, value: Any, expires: int | None = None) -> None:
        """Store a JSON-serializable value.

        Args:
            key: Cache key, unique per agent
            value: Any JSON-serializable value
            expires: Absolute expiry in epoch milliseconds; None never expires

        Raises:
            StoreValidationError: If the value is not JSON-serializable
        """
        try:
            raw = json.dumps({"value": value, "expires": expires or 0})
        except (TypeError, ValueError) as e:
            raise StoreValidationError(f"Cache value for {key!r} is not JSON: {e}", cause=e) from e
        await self.adapter.set_cache(key, raw)

    async def delete(self, key: str) -> None:
        await self.adapter.delete_cache(key)
