"""Agent lifecycle orchestration.

Each character walks the same path:

    loading_credential -> provisioning_storage -> building_runtime
        -> initializing_runtime -> attaching_clients -> registered

Any exception moves the character to `failed`. The failure is logged with
the character name and re-raised as AgentStartupError. When a batch is
started, one character's failure never stops its siblings unless
`orchestrator.fail_fast` is configured.
"""

from dataclasses import dataclass, field
from enum import Enum

import structlog

from troupe.characters.models import Character
from troupe.clients.attacher import initialize_clients
from troupe.clients.base import Client
from troupe.clients.catalog import ClientCatalog, default_catalog
from troupe.config.settings import Settings
from troupe.errors import AgentStartupError
from troupe.observability.logging import get_logger
from troupe.providers.secrets import get_token_for_provider
from troupe.runtime.factory import EngineFactory, create_agent
from troupe.runtime.runtime import AgentRuntime
from troupe.server.registry import AgentRegistry
from troupe.storage.base import DatabaseAdapter
from troupe.storage.provisioner import StorageProvisioner

logger = get_logger(__name__)


class AgentStartupState(str, Enum):
    """Where a character is in its startup sequence."""

    LOADING_CREDENTIAL = "loading_credential"
    PROVISIONING_STORAGE = "provisioning_storage"
    BUILDING_RUNTIME = "building_runtime"
    INITIALIZING_RUNTIME = "initializing_runtime"
    ATTACHING_CLIENTS = "attaching_clients"
    REGISTERED = "registered"
    FAILED = "failed"


@dataclass
class StartupReport:
    """Outcome of starting a batch of characters."""

    started: list[AgentRuntime] = field(default_factory=list)
    failures: list[AgentStartupError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class AgentOrchestrator:
    """Starts characters one after another and registers their runtimes.

    Args:
        settings: Process settings
        registry: Registry shared with the front-end service
        provisioner: Storage provisioner (defaults to one built from settings)
        catalog: Client implementations (defaults to the built-in clients)
        engine_factory: Builds a message engine per character, if any
    """

    def __init__(
        self,
        settings: Settings,
        registry: AgentRegistry,
        provisioner: StorageProvisioner | None = None,
        catalog: ClientCatalog | None = None,
        engine_factory: EngineFactory | None = None,
    ) -> None:
        self._settings = settings
        self._registry = registry
        self._provisioner = provisioner or StorageProvisioner(settings)
        self._catalog = catalog or default_catalog(settings)
        self._engine_factory = engine_factory
        self.states: dict[str, AgentStartupState] = {}

    async def start_agent(self, character: Character) -> list[Client]:
        """Bring one character up to the registered state.

        Returns:
            The clients started for the character

        Raises:
            AgentStartupError: Wrapping whatever failed, with the state it failed in
        """
        state = AgentStartupState.LOADING_CREDENTIAL
        db: DatabaseAdapter | None = None

        agent_id = character.ensure_identity()

        with structlog.contextvars.bound_contextvars(
            agent_name=character.name, agent_id=str(agent_id)
        ):
            try:
                self.states[character.name] = state
                token = get_token_for_provider(
                    character.model_provider, character, self._settings
                )
                if token is None:
                    logger.debug("no_provider_credential", provider=character.model_provider.value)

                state = self._advance(character, AgentStartupState.PROVISIONING_STORAGE)
                db = await self._provisioner.provision()
                cache = self._provisioner.cache_for(character, db)

                state = self._advance(character, AgentStartupState.BUILDING_RUNTIME)
                engine = self._engine_factory(character) if self._engine_factory else None
                runtime = create_agent(character, db, cache, token, engine=engine)

                state = self._advance(character, AgentStartupState.INITIALIZING_RUNTIME)
                await runtime.initialize()

                state = self._advance(character, AgentStartupState.ATTACHING_CLIENTS)
                clients = await initialize_clients(character, runtime, self._catalog)
                runtime.clients = clients

                self._registry.register(runtime)
                self._advance(character, AgentStartupState.REGISTERED)
            except Exception as e:
                self.states[character.name] = AgentStartupState.FAILED
                logger.error(
                    "agent_start_failed",
                    failed_state=state.value,
                    error=str(e),
                    error_type=type(e).__name__,
                    exc_info=True,
                )
                if db is not None:
                    await db.close()
                raise AgentStartupError(character.name, state, e) from e

        return clients

    async def start_agents(self, characters: list[Character]) -> StartupReport:
        """Start characters strictly in order.

        A failing character is recorded and skipped. With `fail_fast`
        enabled the first failure is re-raised instead.

        Raises:
            AgentStartupError: Only when fail_fast is enabled
        """
        report = StartupReport()
        for character in characters:
            try:
                await self.start_agent(character)
            except AgentStartupError as e:
                report.failures.append(e)
                if self._settings.orchestrator.fail_fast:
                    raise
                continue
            runtime = self._registry.get(character.ensure_identity())
            if runtime is not None:
                report.started.append(runtime)

        logger.info(
            "agents_started",
            started=[r.name for r in report.started],
            failed=[f.character_name for f in report.failures],
        )
        return report

    async def stop_all(self) -> None:
        """Stop every registered runtime. Errors are logged, not raised."""
        for runtime in self._registry:
            try:
                await runtime.stop()
            except Exception as e:
                logger.error("agent_stop_failed", agent_name=runtime.name, error=str(e))

    def _advance(self, character: Character, state: AgentStartupState) -> AgentStartupState:
        self.states[character.name] = state
        logger.debug("agent_startup_state", state=state.value)
        return state
