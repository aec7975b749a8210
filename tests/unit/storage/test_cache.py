"""Unit tests for the per-agent cache."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from troupe.storage.cache import CacheManager, DbCacheAdapter, now_ms
from troupe.storage.errors import StoreValidationError
from troupe.storage.sqlite import SqliteDatabaseAdapter


@pytest.fixture
async def db(tmp_path: Path) -> AsyncGenerator[SqliteDatabaseAdapter, None]:
    adapter = SqliteDatabaseAdapter(tmp_path / "db.sqlite")
    await adapter.init()
    yield adapter
    await adapter.close()


@pytest.fixture
def cache(db: SqliteDatabaseAdapter) -> CacheManager:
    return CacheManager(DbCacheAdapter(db, uuid4()))


class TestCacheManager:
    """Tests for CacheManager."""

    async def test_round_trip_json_value(self, cache: CacheManager) -> None:
        await cache.set("profile", {"handle": "ada", "tags": [1, 2]})
        assert await cache.get("profile") == {"handle": "ada", "tags": [1, 2]}

    async def test_missing_key(self, cache: CacheManager) -> None:
        assert await cache.get("nothing") is None

    async def test_expired_entry_removed(
        self, cache: CacheManager, db: SqliteDatabaseAdapter
    ) -> None:
        await cache.set("stale", "old", expires=now_ms() - 1000)

        assert await cache.get("stale") is None
        assert await db.get_cache("stale", cache.agent_id) is None

    async def test_future_expiry_kept(self, cache: CacheManager) -> None:
        await cache.set("fresh", "new", expires=now_ms() + 60_000)
        assert await cache.get("fresh") == "new"

    async def test_corrupt_entry_removed(
        self, cache: CacheManager, db: SqliteDatabaseAdapter
    ) -> None:
        await db.set_cache("bad", cache.agent_id, "{not json")

        assert await cache.get("bad") is None
        assert await db.get_cache("bad", cache.agent_id) is None

    async def test_non_json_value_rejected(self, cache: CacheManager) -> None:
        with pytest.raises(StoreValidationError):
            await cache.set("obj", object())

    async def test_delete(self, cache: CacheManager) -> None:
        await cache.set("k", 1)
        await cache.delete("k")
        assert await cache.get("k") is None

    async def test_agents_isolated_on_shared_store(self, db: SqliteDatabaseAdapter) -> None:
        ada = CacheManager(DbCacheAdapter(db, uuid4()))
        grace = CacheManager(DbCacheAdapter(db, uuid4()))

        await ada.set("mood", "calm")

        assert await grace.get("mood") is None
        assert await ada.get("mood") == "calm"


class TestDbCacheAdapter:
    """Tests for DbCacheAdapter."""

    async def test_binds_agent_id(self) -> None:
        agent_id = uuid4()
        db = AsyncMock()
        adapter = DbCacheAdapter(db, agent_id)

        await adapter.set_cache("k", "v")
        await adapter.get_cache("k")
        await adapter.delete_cache("k")

        db.set_cache.assert_awaited_once_with("k", agent_id, "v")
        db.get_cache.assert_awaited_once_with("k", agent_id)
        db.delete_cache.assert_awaited_once_with("k", agent_id)
