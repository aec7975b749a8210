"""Agent storage: database adapters, the per-agent cache, and provisioning."""

from troupe.storage.base import DatabaseAdapter
from troupe.storage.cache import CacheManager, DbCacheAdapter
from troupe.storage.errors import StoreConnectionError, StoreError, StoreValidationError
from troupe.storage.postgres import PostgresDatabaseAdapter
from troupe.storage.provisioner import (
    StorageBackend,
    StorageProvisioner,
    resolve_storage_backend,
)
from troupe.storage.sqlite import SqliteDatabaseAdapter

__all__ = [
    "CacheManager",
    "DatabaseAdapter",
    "DbCacheAdapter",
    "PostgresDatabaseAdapter",
    "SqliteDatabaseAdapter",
    "StorageBackend",
    "StorageProvisioner",
    "StoreConnectionError",
    "StoreError",
    "StoreValidationError",
    "resolve_storage_backend",
]
