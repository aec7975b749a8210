"""Configuration models for Troupe settings sections."""

from troupe.config.models.observability import LogFormat, LogLevel, ObservabilityConfig
from troupe.config.models.orchestrator import (
    ClientsConfig,
    OrchestratorConfig,
    ServerConfig,
)
from troupe.config.models.storage import StorageConfig

__all__ = [
    "ClientsConfig",
    "LogFormat",
    "LogLevel",
    "ObservabilityConfig",
    "OrchestratorConfig",
    "ServerConfig",
    "StorageConfig",
]
