"""Observability configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class ObservabilityConfig(BaseModel):
    """Structured logging configuration."""

    log_level: LogLevel = Field(default="INFO", description="Minimum log level")
    log_format: LogFormat = Field(
        default="console",
        description="Output format: json for production, console for terminals",
    )
    redact_secrets: bool = Field(
        default=True,
        description="Redact credentials and connection passwords from log events",
    )
