"""Storage provisioning for agent runtimes.

The backend is chosen once from settings: a configured POSTGRES_URL always
means Postgres, even when SQLITE_FILE is also set. Every character gets a
brand-new adapter instance so no two runtimes ever share one.
"""

from enum import Enum
from pathlib import Path

from troupe.characters.models import Character
from troupe.config.settings import Settings
from troupe.observability.logging import get_logger
from troupe.storage.base import DatabaseAdapter
from troupe.storage.cache import CacheManager, DbCacheAdapter
from troupe.storage.postgres import PostgresDatabaseAdapter
from troupe.storage.sqlite import SqliteDatabaseAdapter

logger = get_logger(__name__)

SQLITE_FILENAME = "db.sqlite"


class StorageBackend(str, Enum):
    """Which kind of durable store agents use."""

    NETWORKED = "networked"
    EMBEDDED = "embedded"


def resolve_storage_backend(settings: Settings) -> StorageBackend:
    """Pick the backend from settings."""
    if settings.postgres_url:
        return StorageBackend.NETWORKED
    return StorageBackend.EMBEDDED


class StorageProvisioner:
    """Builds and initializes one store per character.

    Args:
        settings: Process settings (connection string, file override, pool sizes)
        data_dir: Directory for the embedded store (defaults to settings.storage.data_dir)
    """

    def __init__(self, settings: Settings, data_dir: Path | None = None) -> None:
        self._settings = settings
        self.data_dir = Path(data_dir or settings.storage.data_dir).resolve()
        self.backend = resolve_storage_backend(settings)

    @property
    def sqlite_path(self) -> Path:
        """Embedded store file: SQLITE_FILE if set, else <data_dir>/db.sqlite."""
        if self._settings.sqlite_file:
            return Path(self._settings.sqlite_file)
        return self.data_dir / SQLITE_FILENAME

    def ensure_data_dir(self) -> Path:
        """Create the data directory (with parents) if it does not exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        return self.data_dir

    def create_adapter(self) -> DatabaseAdapter:
        """Build a new, uninitialized adapter for the configured backend."""
        if self.backend is StorageBackend.NETWORKED:
            storage = self._settings.storage
            return PostgresDatabaseAdapter(
                dsn=self._settings.postgres_url or "",
                min_size=storage.min_pool_size,
                max_size=storage.max_pool_size,
                command_timeout=storage.command_timeout,
            )
        return SqliteDatabaseAdapter(self.sqlite_path)

    async def provision(self) -> DatabaseAdapter:
        """Create the data directory, build an adapter and initialize it.

        Raises:
            StoreConnectionError: If the adapter's init fails
        """
        self.ensure_data_dir()
        db = self.create_adapter()
        logger.debug("storage_adapter_created", backend=self.backend.value)
        await db.init()
        return db

    def cache_for(self, character: Character, db: DatabaseAdapter) -> CacheManager:
        """Layer a cache keyed by the character's id over an initialized store."""
        agent_id = character.ensure_identity()
        return CacheManager(DbCacheAdapter(db, agent_id))
