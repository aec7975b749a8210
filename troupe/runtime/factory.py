"""Runtime construction."""

import importlib
from collections.abc import Callable

from troupe.characters.models import Character
from troupe.observability.logging import get_logger
from troupe.runtime.engine import MessageEngine
from troupe.runtime.plugins import baseline_plugins
from troupe.runtime.runtime import AgentRuntime
from troupe.storage.base import DatabaseAdapter
from troupe.storage.cache import CacheManager

logger = get_logger(__name__)

EngineFactory = Callable[[Character], MessageEngine | None]


def create_agent(
    character: Character,
    db: DatabaseAdapter,
    cache: CacheManager,
    token: str | None,
    engine: MessageEngine | None = None,
) -> AgentRuntime:
    """Build a runtime for `character`. Performs no I/O.

    Args:
        character: Character definition
        db: Initialized store owned by the new runtime
        cache: Cache layered over `db` for this character
        token: Resolved model provider credential, or None
        engine: Message engine, if one is available

    Returns:
        An uninitialized AgentRuntime carrying the baseline plugins
    """
    runtime = AgentRuntime(
        character=character,
        database_adapter=db,
        cache_manager=cache,
        token=token,
        model_provider=character.model_provider,
        plugins=baseline_plugins(),
        actions=[],
        providers=[],
        evaluators=[],
        services=[],
        managers=[],
        engine=engine,
    )
    logger.info("agent_runtime_created", agent_name=character.name)
    return runtime


def load_engine_factory(path: str) -> EngineFactory:
    """Import an engine factory from a `module:callable` path.

    Raises:
        ValueError: If the path is not of the form module:callable
        ImportError: If the module cannot be imported
        AttributeError: If the module has no such attribute
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Engine factory must look like 'module:callable', got {path!r}")

    factory = getattr(importlib.import_module(module_name), attr)
    if not callable(factory):
        raise ValueError(f"Engine factory {path!r} is not callable")
    logger.info("engine_factory_loaded", path=path)
    return factory
