"""Character definition models.

A character file is one JSON object. Only `name` is required; persona
fields the runtime engine reads (bio, lore, style, ...) are kept as-is.
"""

from typing import Any
from uuid import UUID, uuid5

from pydantic import BaseModel, ConfigDict, Field, field_validator

from troupe.providers.models import ModelProviderName

# Namespace for ids derived from character names. Changing it changes
# every derived agent id and orphans cached state.
CHARACTER_NAMESPACE = UUID("6f0b8a52-3c1e-5d4b-9a8e-2f5d7c1b4e90")


def string_to_uuid(value: str) -> UUID:
    """Derive a stable UUID from a string (same input, same UUID, every run)."""
    return uuid5(CHARACTER_NAMESPACE, value)


class PluginDeclaration(BaseModel):
    """A plugin named by a character, optionally contributing clients."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1, description="Plugin name")
    description: str | None = Field(default=None, description="What the plugin adds")
    clients: list[str] = Field(
        default_factory=list,
        description="Client type names this plugin starts",
    )


class CharacterSettings(BaseModel):
    """Per-character settings. Secrets override process-wide credentials."""

    model_config = ConfigDict(extra="allow")

    secrets: dict[str, str] = Field(default_factory=dict)
    model: str | None = Field(default=None, description="Model override for the provider")


class Character(BaseModel):
    """Declarative definition of one agent."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., min_length=1, description="Display name, also the chat address")
    id: UUID | None = Field(default=None, description="Stable agent id")
    username: str | None = Field(default=None)
    model_provider: ModelProviderName = Field(
        default=ModelProviderName.OPENAI,
        alias="modelProvider",
    )
    clients: list[str] = Field(default_factory=list, description="Client type names")
    plugins: list[PluginDeclaration] = Field(default_factory=list)
    settings: CharacterSettings = Field(default_factory=CharacterSettings)

    system: str | None = None
    bio: str | list[str] = Field(default_factory=list)
    lore: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    adjectives: list[str] = Field(default_factory=list)

    @field_validator("model_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("plugins", mode="before")
    @classmethod
    def _expand_plugin_names(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"name": item} if isinstance(item, str) else item for item in value]
        return value

    def ensure_identity(self) -> UUID:
        """Fill in `id` and `username` if unset and return the id.

        Safe to call repeatedly; an existing id is never replaced.
        """
        if self.id is None:
            self.id = string_to_uuid(self.name)
        if not self.username:
            self.username = self.name
        return self.id
