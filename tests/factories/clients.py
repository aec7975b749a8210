"""Fake communication clients for testing attachment order and failures."""

from troupe.runtime.runtime import AgentRuntime


class FakeClient:
    """Started client that records whether it was stopped."""

    def __init__(self, name: str, runtime: AgentRuntime) -> None:
        self.name = name
        self.runtime = runtime
        self.stopped = False

    async def stop(self) -> None:
        self.stopped = True


class FakeClientInterface:
    """Client interface that records the order it was started in.

    Args:
        name: Client type name
        started: Shared list that receives `name` on each start
        decline: Return None from start instead of a client
    """

    def __init__(self, name: str, started: list[str] | None = None, decline: bool = False) -> None:
        self._name = name
        self.started = started if started is not None else []
        self.decline = decline
        self.clients: list[FakeClient] = []

    @property
    def name(self) -> str:
        return self._name

    async def start(self, runtime: AgentRuntime) -> FakeClient | None:
        self.started.append(self._name)
        if self.decline:
            return None
        client = FakeClient(self._name, runtime)
        self.clients.append(client)
        return client


class FailingClientInterface:
    """Client interface whose start always fails, like a platform client missing its token."""

    def __init__(self, name: str = "broken", error: Exception | None = None) -> None:
        self._name = name
        self.error = error or KeyError("BROKEN_API_TOKEN")

    @property
    def name(self) -> str:
        return self._name

    async def start(self, runtime: AgentRuntime) -> FakeClient:
        raise self.error
