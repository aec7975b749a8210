"""Embedded file-backed store using aiosqlite."""

from pathlib import Path
from uuid import UUID

import aiosqlite

from troupe.observability.logging import get_logger
from troupe.storage.base import CACHE_TABLE, DatabaseAdapter
from troupe.storage.errors import StoreConnectionError, StoreError

logger = get_logger(__name__)

_CREATE_CACHE_TABLE = f"""
CREATE TABLE IF NOT EXISTS {CACHE_TABLE} (
    key TEXT NOT NULL,
    agent_id TEXT NOT NULL,
    value TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (key, agent_id)
)
"""


class SqliteDatabaseAdapter(DatabaseAdapter):
    """SQLite adapter holding one connection for the agent's lifetime.

    Usage:
        db = SqliteDatabaseAdapter(Path("data/db.sqlite"))
        await db.init()
        try:
            await db.set_cache("k", agent_id, "{}")
        finally:
            await db.close()
    """

    def __init__(self, file_path: Path | str) -> None:
        self.file_path = Path(file_path)
        self._conn: aiosqlite.Connection | None = None

    async def init(self) -> None:
        if self._conn is not None:
            return

        try:
            self._conn = await aiosqlite.connect(str(self.file_path))
            await self._conn.execute("PRAGMA journal_mode=WAL")
            await self._conn.execute(_CREATE_CACHE_TABLE)
            await self._conn.commit()
        except aiosqlite.Error as e:
            logger.error("sqlite_init_failed", path=str(self.file_path), error=str(e))
            await self.close()
            raise StoreConnectionError(
                f"Failed to open SQLite database at {self.file_path}: {e}", cause=e
            ) from e

        logger.info("sqlite_store_initialized", path=str(self.file_path))

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    @property
    def is_initialized(self) -> bool:
        return self._conn is not None

    def _connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StoreError("SQLite adapter used before init()")
        return self._conn

    async def get_cache(self, key: str, agent_id: UUID) -> str | None:
        conn = self._connection()
        async with conn.execute(
            f"SELECT value FROM {CACHE_TABLE} WHERE key = ? AND agent_id = ?",
            (key, str(agent_id)),
        ) as cursor:
            row = await cursor.fetchone()
        return row[0] if row else None

    async def set_cache(self, key: str, agent_id: UUID, value: str) -> bool:
        conn = self._connection()
        await conn.execute(
            f"INSERT INTO {CACHE_TABLE} (key, agent_id, value) VALUES (?, ?, ?) "
            "ON CONFLICT (key, agent_id) DO UPDATE SET "
            "value = excluded.value, created_at = CURRENT_TIMESTAMP",
            (key, str(agent_id), value),
        )
        await conn.commit()
        return True

    async def delete_cache(self, key: str, agent_id: UUID) -> bool:
        conn = self._connection()
        cursor = await conn.execute(
            f"DELETE FROM {CACHE_TABLE} WHERE key = ? AND agent_id = ?",
            (key, str(agent_id)),
        )
        await conn.commit()
        return cursor.rowcount > 0
