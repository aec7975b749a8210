"""Character file discovery and loading.

Every explicitly named file must load. A user who names a file expects
that character to run, so a single bad file stops the process before any
agent starts instead of silently starting fewer agents.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from troupe.characters.defaults import default_character
from troupe.characters.models import Character
from troupe.errors import CharacterLoadError
from troupe.observability.logging import get_logger

logger = get_logger(__name__)


def resolve_character_paths(
    characters_arg: str | None,
    characters_dir: Path,
    cwd: Path | None = None,
) -> list[Path]:
    """Turn a comma-separated argument into absolute file paths.

    Bare filenames resolve against `characters_dir`; anything with a
    directory part resolves against the working directory.

    Args:
        characters_arg: Comma-separated paths, or None
        characters_dir: Conventional directory for bare filenames
        cwd: Working directory (defaults to the process cwd)

    Returns:
        Paths in the order given, empty entries dropped
    """
    if not characters_arg:
        return []

    base = cwd or Path.cwd()
    paths = []
    for raw in characters_arg.split(","):
        entry = raw.strip()
        if not entry:
            continue
        path = Path(entry)
        if path.name == entry:
            path = characters_dir / path
        paths.append((base / path).resolve())
    return paths


def load_character_file(path: Path) -> Character:
    """Read, parse and validate a single character file.

    Raises:
        CharacterLoadError: If the file is missing, not JSON, or fails validation
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Character.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise CharacterLoadError(path, e) from e


def load_characters(
    characters_arg: str | None,
    characters_dir: Path,
    cwd: Path | None = None,
) -> list[Character]:
    """Load characters named on the command line.

    Args:
        characters_arg: Comma-separated paths, or None for the default character
        characters_dir: Directory bare filenames resolve against
        cwd: Working directory (defaults to the process cwd)

    Returns:
        Characters in the order given, or the built-in default when none
        were named

    Raises:
        CharacterLoadError: On the first file that fails to load
    """
    paths = resolve_character_paths(characters_arg, characters_dir, cwd)
    logger.info("character_paths_resolved", paths=[str(p) for p in paths])

    characters: list[Character] = []
    for path in paths:
        try:
            character = load_character_file(path)
        except CharacterLoadError as e:
            logger.error("character_load_failed", path=str(path), error=str(e.cause))
            raise
        logger.debug("character_loaded", path=str(path), name=character.name)
        characters.append(character)

    if not characters:
        logger.info("no_characters_found_using_default")
        characters.append(default_character())

    logger.info("characters_selected", names=[c.name for c in characters])
    return characters
