"""Client capability protocol.

Each communication client (built-in or contributed by a plugin) exposes a
`start` routine that attaches it to a runtime. A start routine may decline
by returning None; that client is then skipped.
"""

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from troupe.runtime.runtime import AgentRuntime


class Client(Protocol):
    """A started client bound to one runtime."""

    name: str

    async def stop(self) -> None:
        """Detach from the runtime and release resources."""
        ...


class ClientInterface(Protocol):
    """Factory side of a client: knows how to start one against a runtime."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Client type name as written in character files, lower-case."""
        ...

    @abstractmethod
    async def start(self, runtime: "AgentRuntime") -> Client | None:
        """Start a client for `runtime`, or return None to skip it."""
        ...
