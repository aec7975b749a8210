"""Networked relational store using an asyncpg connection pool."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

import asyncpg

from troupe.observability.logging import get_logger
from troupe.storage.base import CACHE_TABLE, DatabaseAdapter
from troupe.storage.errors import StoreConnectionError, StoreError

logger = get_logger(__name__)

_CREATE_CACHE_TABLE = f"""
CREATE TABLE IF NOT EXISTS {CACHE_TABLE} (
    key TEXT NOT NULL,
    agent_id UUID NOT NULL,
    value TEXT NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
    PRIMARY KEY (key, agent_id)
)
"""


class PostgresDatabaseAdapter(DatabaseAdapter):
    """Postgres adapter with its own connection pool.

    Each agent gets a separate adapter and pool even when every agent points
    at the same database; rows are partitioned by agent id.
    """

    def __init__(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 60.0,
    ) -> None:
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    async def init(self) -> None:
        if self._pool is not None:
            return

        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
            )
            async with self._pool.acquire() as conn:
                await conn.execute(_CREATE_CACHE_TABLE)
        except Exception as e:
            logger.error("postgres_init_failed", dsn=self._dsn, error=str(e))
            await self.close()
            raise StoreConnectionError(f"Failed to connect to PostgreSQL: {e}", cause=e) from e

        logger.info(
            "postgres_store_initialized",
            min_size=self._min_size,
            max_size=self._max_size,
        )

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("postgres_pool_closed")

    @property
    def is_initialized(self) -> bool:
        return self._pool is not None

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a connection from the pool.

        Raises:
            StoreError: If used before init()
            StoreConnectionError: On a Postgres error inside the block
        """
        if self._pool is None:
            raise StoreError("Postgres adapter used before init()")

        try:
            async with self._pool.acquire() as connection:
                yield connection
        except asyncpg.PostgresError as e:
            logger.error("postgres_connection_error", error=str(e))
            raise StoreConnectionError(f"PostgreSQL error: {e}", cause=e) from e

    async def get_cache(self, key: str, agent_id: UUID) -> str | None:
        async with self.acquire() as conn:
            return await conn.fetchval(
                f"SELECT value FROM {CACHE_TABLE} WHERE key = $1 AND agent_id = $2",
                key,
                agent_id,
            )

    async def set_cache(self, key: str, agent_id: UUID, value: str) -> bool:
        async with self.acquire() as conn:
            await conn.execute(
                f"INSERT INTO {CACHE_TABLE} (key, agent_id, value) VALUES ($1, $2, $3) "
                "ON CONFLICT (key, agent_id) DO UPDATE SET "
                "value = EXCLUDED.value, created_at = now()",
                key,
                agent_id,
                value,
            )
        return True

    async def delete_cache(self, key: str, agent_id: UUID) -> bool:
        async with self.acquire() as conn:
            status = await conn.execute(
                f"DELETE FROM {CACHE_TABLE} WHERE key = $1 AND agent_id = $2",
                key,
                agent_id,
            )
        # asyncpg returns the command tag, e.g. "DELETE 1"
        return status.rsplit(" ", 1)[-1] != "0"
