"""Runs the front-end service inside the orchestrator's event loop."""

import asyncio

import uvicorn

from troupe.observability.logging import get_logger
from troupe.server.app import create_app
from troupe.server.registry import AgentRegistry

logger = get_logger(__name__)


class DirectServer:
    """uvicorn server serving the message API for a registry.

    Usage:
        server = DirectServer(registry, host="0.0.0.0", port=3000)
        await server.start()
        ...
        await server.stop()
    """

    def __init__(self, registry: AgentRegistry, host: str, port: int) -> None:
        self.registry = registry
        self.host = host
        self.port = port
        config = uvicorn.Config(
            create_app(registry),
            host=host,
            port=port,
            log_level="warning",
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._server.serve(), name="troupe-server")
        logger.info("server_started", host=self.host, port=self.port)

    async def wait(self) -> None:
        """Block until the server exits."""
        if self._task is not None:
            await self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._server.should_exit = True
        await self._task
        self._task = None
        logger.info("server_stopped")
