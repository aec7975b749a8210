"""Credential resolution for a character's model provider.

A character may override any secret in its `settings.secrets` map; otherwise
the process-wide setting is used. Providers that run locally have no secret
source and resolve to None, which callers treat as "no credential needed".
"""

from dataclasses import dataclass

from troupe.characters.models import Character
from troupe.config.settings import Settings
from troupe.providers.models import ModelProviderName


@dataclass(frozen=True)
class SecretSource:
    """Where a provider's credential may come from."""

    character_keys: tuple[str, ...]
    setting: str


SECRET_SOURCES: dict[ModelProviderName, SecretSource] = {
    ModelProviderName.OPENAI: SecretSource(
        character_keys=("OPENAI_API_KEY",),
        setting="openai_api_key",
    ),
    ModelProviderName.OPENROUTER: SecretSource(
        character_keys=("OPENROUTER", "OPENROUTER_API_KEY"),
        setting="openrouter_api_key",
    ),
    ModelProviderName.ANTHROPIC: SecretSource(
        character_keys=("ANTHROPIC_API_KEY",),
        setting="anthropic_api_key",
    ),
}


def get_token_for_provider(
    provider: ModelProviderName,
    character: Character,
    settings: Settings,
) -> str | None:
    """Resolve the credential for `provider` as seen by `character`.

    Args:
        provider: The character's model provider
        character: Character whose secret overrides take precedence
        settings: Process-wide settings holding the default keys

    Returns:
        The credential, or None when the provider has no secret source or
        nothing is configured
    """
    source = SECRET_SOURCES.get(provider)
    if source is None:
        return None

    secrets = character.settings.secrets
    for key in source.character_keys:
        if secrets.get(key):
            return secrets[key]

    default = getattr(settings, source.setting)
    if default is None:
        return None
    return default.get_secret_value() or None
