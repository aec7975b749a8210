"""Unit tests for AgentRegistry."""

from unittest.mock import AsyncMock, MagicMock

from troupe.runtime.factory import create_agent
from troupe.runtime.runtime import AgentRuntime
from troupe.server.registry import AgentRegistry
from tests.factories import CharacterFactory


def make_runtime(name: str) -> AgentRuntime:
    db = MagicMock()
    db.close = AsyncMock()
    return create_agent(CharacterFactory.create(name=name), db, MagicMock(), token=None)


class TestAgentRegistry:
    """Tests for AgentRegistry."""

    def test_lookup_by_id_string_and_name(self) -> None:
        registry = AgentRegistry()
        ada = make_runtime("Ada")
        registry.register(ada)

        assert registry.get(ada.agent_id) is ada
        assert registry.get(str(ada.agent_id)) is ada
        assert registry.get("ada") is ada
        assert registry.get("Grace") is None

    def test_last_registration_wins(self) -> None:
        registry = AgentRegistry()
        first, second = make_runtime("Ada"), make_runtime("Ada")

        registry.register(first)
        registry.register(second)

        assert len(registry) == 1
        assert registry.get("Ada") is second

    def test_registration_order(self) -> None:
        registry = AgentRegistry()
        for name in ("Ada", "Grace", "Hedy"):
            registry.register(make_runtime(name))

        assert [r.name for r in registry] == ["Ada", "Grace", "Hedy"]
        assert [r.name for r in registry.agents()] == ["Ada", "Grace", "Hedy"]

    def test_contains(self) -> None:
        registry = AgentRegistry()
        ada = make_runtime("Ada")
        registry.register(ada)

        assert ada.agent_id in registry
        assert "Ada" in registry
        assert "Grace" not in registry
        assert 42 not in registry
