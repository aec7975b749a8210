"""Character definitions: models, the built-in default, and file loading."""

from troupe.characters.defaults import default_character
from troupe.characters.loader import (
    load_character_file,
    load_characters,
    resolve_character_paths,
)
from troupe.characters.models import (
    Character,
    CharacterSettings,
    PluginDeclaration,
    string_to_uuid,
)

__all__ = [
    "Character",
    "CharacterSettings",
    "PluginDeclaration",
    "default_character",
    "load_character_file",
    "load_characters",
    "resolve_character_paths",
    "string_to_uuid",
]
