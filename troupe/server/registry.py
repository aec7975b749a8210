"""Process-wide directory of running agents.

The registry is created once at startup and handed explicitly to the
orchestrator (which adds agents) and to the front-end service (which routes
messages to them). Entries are never removed.
"""

from collections.abc import Iterator
from uuid import UUID

from troupe.observability.logging import get_logger
from troupe.runtime.runtime import AgentRuntime

logger = get_logger(__name__)


class AgentRegistry:
    """Maps agent id to runtime. The last registration for an id wins."""

    def __init__(self) -> None:
        self._agents: dict[UUID, AgentRuntime] = {}

    def register(self, runtime: AgentRuntime) -> None:
        replaced = runtime.agent_id in self._agents
        self._agents[runtime.agent_id] = runtime
        logger.info(
            "agent_registered",
            agent_name=runtime.name,
            agent_id=str(runtime.agent_id),
            replaced=replaced,
        )

    def get(self, key: str | UUID) -> AgentRuntime | None:
        """Find an agent by id, or by name (case-insensitive).

        The chat bridge addresses agents by character name, other callers
        by id; both are accepted.
        """
        if isinstance(key, UUID):
            return self._agents.get(key)

        try:
            runtime = self._agents.get(UUID(key))
        except ValueError:
            runtime = None
        if runtime is not None:
            return runtime

        wanted = key.lower()
        for candidate in self._agents.values():
            if candidate.name.lower() == wanted:
                return candidate
        return None

    def agents(self) -> list[AgentRuntime]:
        """Registered runtimes in registration order."""
        return list(self._agents.values())

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str | UUID):
            return False
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator[AgentRuntime]:
        return iter(self.agents())
