"""Root settings model for Troupe configuration."""

from typing import Any

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from troupe.config.models.observability import ObservabilityConfig
from troupe.config.models.orchestrator import (
    ClientsConfig,
    OrchestratorConfig,
    ServerConfig,
)
from troupe.config.models.storage import StorageConfig

# Module-level variable to store TOML config for settings source
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that reads from TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return _toml_config.copy()


def _env(name: str, *extra: str) -> AliasChoices:
    """Accept the field name, the bare variable and its TROUPE_ form."""
    return AliasChoices(name.lower(), name, f"TROUPE_{name}", *extra)


class Settings(BaseSettings):
    """Root configuration object.

    The process-wide variables an operator is expected to set
    (POSTGRES_URL, SQLITE_FILE, provider keys, API_URL, SERVER_PORT) are read
    without a prefix. Everything else uses TROUPE_* with `__` for nesting,
    e.g. TROUPE_STORAGE__DATA_DIR.
    """

    model_config = SettingsConfigDict(
        env_prefix="TROUPE_",
        env_nested_delimiter="__",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="troupe", description="Application name for logging")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Storage backend selection
    postgres_url: str | None = Field(
        default=None,
        validation_alias=_env("POSTGRES_URL"),
        description="Networked store connection string; selects the Postgres backend",
    )
    sqlite_file: str | None = Field(
        default=None,
        validation_alias=_env("SQLITE_FILE"),
        description="Embedded store file override (default: <data_dir>/db.sqlite)",
    )

    # Process-wide model provider credentials
    openai_api_key: SecretStr | None = Field(
        default=None, validation_alias=_env("OPENAI_API_KEY")
    )
    openrouter_api_key: SecretStr | None = Field(
        default=None, validation_alias=_env("OPENROUTER_API_KEY")
    )
    anthropic_api_key: SecretStr | None = Field(
        default=None, validation_alias=_env("ANTHROPIC_API_KEY")
    )

    # Front-end service and chat bridge target
    api_url: str = Field(
        default="http://localhost",
        validation_alias=_env("API_URL"),
        description="Base URL the chat bridge posts to (port is appended)",
    )
    server_port: int = Field(
        default=3000,
        gt=0,
        lt=65536,
        validation_alias=_env("SERVER_PORT"),
        description="Port of the front-end service",
    )

    # Nested configuration sections
    storage: StorageConfig = Field(default_factory=StorageConfig)
    orchestrator: OrchestratorConfig = Field(default_factory=OrchestratorConfig)
    clients: ClientsConfig = Field(default_factory=ClientsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Priority: constructor, environment, .env, TOML, model defaults."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
        )
