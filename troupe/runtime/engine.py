"""Contract between an agent runtime and the engine that does its thinking.

Planning, model calls and memory retrieval all live behind this protocol;
Troupe only constructs the runtime and routes messages to it.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from troupe.runtime.models import IncomingMessage, ResponseContent

if TYPE_CHECKING:
    from troupe.runtime.runtime import AgentRuntime


class MessageEngine(Protocol):
    """Produces an agent's replies to a message."""

    async def handle_message(
        self,
        runtime: "AgentRuntime",
        message: IncomingMessage,
    ) -> list[ResponseContent]:
        """Process one inbound message and return the agent's replies."""
        ...


@runtime_checkable
class TickingEngine(Protocol):
    """Engines that also act on a schedule, driven by the auto client."""

    async def on_tick(self, runtime: "AgentRuntime") -> None:
        ...


class Service(Protocol):
    """A long-lived helper a plugin contributes to a runtime."""

    name: str

    async def initialize(self, runtime: "AgentRuntime") -> None:
        ...
