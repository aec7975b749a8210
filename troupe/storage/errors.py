"""Store error hierarchy.

Adapters wrap backend-specific exceptions (asyncpg, sqlite) in these so
the orchestrator can report storage failures uniformly.
"""

from troupe.errors import TroupeError


class StoreError(TroupeError):
    """Base exception for all store errors."""


class StoreConnectionError(StoreError):
    """Raised when a store cannot be opened or initialized.

    Examples:
        - Postgres unreachable or authentication rejected
        - SQLite file in a directory that cannot be created
    """


class StoreValidationError(StoreError):
    """Raised when a value cannot be stored (e.g. not JSON-serializable)."""
