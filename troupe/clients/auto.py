"""Auto client: lets the engine act on a schedule without user input."""

import asyncio
import contextlib
from typing import TYPE_CHECKING

from troupe.observability.logging import get_logger
from troupe.runtime.engine import TickingEngine

if TYPE_CHECKING:
    from troupe.runtime.runtime import AgentRuntime

logger = get_logger(__name__)


class AutoClient:
    """Calls the engine's `on_tick` hook every `interval` seconds.

    A failing tick is logged and the schedule continues.
    """

    name = "auto"

    def __init__(self, runtime: "AgentRuntime", interval: float) -> None:
        self._runtime = runtime
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(
                self._run(), name=f"auto-client-{self._runtime.name}"
            )

    async def _run(self) -> None:
        engine = self._runtime.engine
        while True:
            await asyncio.sleep(self._interval)
            if not isinstance(engine, TickingEngine):
                continue
            try:
                await engine.on_tick(self._runtime)
            except Exception as e:
                logger.error(
                    "auto_client_tick_failed",
                    agent_name=self._runtime.name,
                    error=str(e),
                )

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None


class AutoClientInterface:
    """Starts an AutoClient for a runtime."""

    def __init__(self, interval: float = 3600.0) -> None:
        self.interval = interval

    @property
    def name(self) -> str:
        return "auto"

    async def start(self, runtime: "AgentRuntime") -> AutoClient:
        client = AutoClient(runtime, self.interval)
        client.start()
        logger.info("auto_client_started", agent_name=runtime.name, interval=self.interval)
        return client
