"""Agent startup and client configuration models."""

from pathlib import Path

from pydantic import BaseModel, Field


class OrchestratorConfig(BaseModel):
    """Controls how a batch of characters is started."""

    fail_fast: bool = Field(
        default=False,
        description="Abort the whole process when any single character fails to start",
    )
    characters_dir: Path = Field(
        default=Path("characters"),
        description="Directory that bare character filenames resolve against",
    )
    engine_factory: str | None = Field(
        default=None,
        description="Import path (module:callable) of the message engine factory",
    )


class ClientsConfig(BaseModel):
    """Built-in communication client settings."""

    auto_interval_seconds: float = Field(
        default=3600.0,
        gt=0,
        description="How often the auto client ticks the agent engine",
    )


class ServerConfig(BaseModel):
    """Front-end HTTP service settings. The port is the top-level server_port."""

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    enabled: bool = Field(default=True, description="Serve the message API")
