"""AgentRuntime: the live state of one character.

The runtime binds a character to its store, its cache, its model
credential and its plugins. It is built by the factory, initialized by the
orchestrator, and lives until the process exits.
"""

from typing import TYPE_CHECKING, Any
from uuid import UUID

from troupe.characters.models import Character
from troupe.errors import EngineNotConfiguredError
from troupe.observability.logging import get_logger
from troupe.providers.models import ModelProviderName
from troupe.runtime.engine import MessageEngine, Service
from troupe.runtime.models import IncomingMessage, ResponseContent
from troupe.runtime.plugins import Plugin
from troupe.storage.base import DatabaseAdapter
from troupe.storage.cache import CacheManager

if TYPE_CHECKING:
    from troupe.clients.base import Client

logger = get_logger(__name__)


class AgentRuntime:
    """Runtime instance for one character.

    Attributes:
        character: The character this runtime embodies
        database_adapter: Store exclusively owned by this runtime
        cache_manager: Cache keyed by this runtime's agent id
        token: Model provider credential, or None
        plugins: Baseline plus any engine-registered plugins
        clients: Communication clients started against this runtime
    """

    def __init__(
        self,
        character: Character,
        database_adapter: DatabaseAdapter,
        cache_manager: CacheManager,
        token: str | None,
        model_provider: ModelProviderName,
        plugins: list[Plugin],
        actions: list[Any] | None = None,
        providers: list[Any] | None = None,
        evaluators: list[Any] | None = None,
        services: list[Service] | None = None,
        managers: list[Any] | None = None,
        engine: MessageEngine | None = None,
    ) -> None:
        self.character = character
        self.agent_id: UUID = character.ensure_identity()
        self.database_adapter = database_adapter
        self.cache_manager = cache_manager
        self.token = token
        self.model_provider = model_provider
        self.plugins = plugins
        self.actions: list[Any] = list(actions or [])
        self.providers: list[Any] = list(providers or [])
        self.evaluators: list[Any] = list(evaluators or [])
        self.services: dict[str, Service] = {s.name: s for s in services or []}
        self.managers: list[Any] = list(managers or [])
        self.engine = engine
        self.clients: list["Client"] = []
        self._initialized = False

    @property
    def name(self) -> str:
        return self.character.name

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def __repr__(self) -> str:
        return f"AgentRuntime(name={self.name!r}, agent_id={self.agent_id})"

    async def initialize(self) -> None:
        """Register plugin capabilities and initialize services.

        Runs once; later calls are no-ops.
        """
        if self._initialized:
            return

        for plugin in self.plugins:
            self.actions.extend(plugin.actions)
            self.providers.extend(plugin.providers)
            self.evaluators.extend(plugin.evaluators)
            for service in plugin.services:
                self.services.setdefault(service.name, service)

        for name, service in self.services.items():
            await service.initialize(self)
            logger.debug("service_initialized", service=name, agent_name=self.name)

        self._initialized = True
        logger.info(
            "agent_runtime_initialized",
            agent_name=self.name,
            agent_id=str(self.agent_id),
            plugins=[p.name for p in self.plugins],
            services=list(self.services),
        )

    async def handle_message(self, message: IncomingMessage) -> list[ResponseContent]:
        """Hand a message to the engine and return its replies.

        Raises:
            EngineNotConfiguredError: If no engine is attached
        """
        if self.engine is None:
            raise EngineNotConfiguredError(f"Agent {self.name} has no message engine")
        return await self.engine.handle_message(self, message)

    async def stop(self) -> None:
        """Stop this runtime's clients and close its store.

        A client that fails to stop is logged; the remaining clients are
        still stopped and the store is still closed.
        """
        try:
            for client in self.clients:
                try:
                    await client.stop()
                except Exception as e:
                    logger.error(
                        "client_stop_failed",
                        client=client.name,
                        agent_name=self.name,
                        error=str(e),
                    )
        finally:
            self.clients = []
            await self.database_adapter.close()
        logger.info("agent_runtime_stopped", agent_name=self.name)
