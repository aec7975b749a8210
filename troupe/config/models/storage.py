"""Storage backend configuration models."""

from pathlib import Path

from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """Where agent state lives and how the networked store is pooled.

    Backend selection itself is driven by the top-level `postgres_url`
    setting so that the plain POSTGRES_URL environment variable works.
    """

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the embedded store file",
    )
    min_pool_size: int = Field(
        default=1,
        gt=0,
        description="Minimum connections to keep open per agent store",
    )
    max_pool_size: int = Field(
        default=5,
        gt=0,
        description="Maximum connections in each agent's pool",
    )
    command_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Default timeout for queries (seconds)",
    )
