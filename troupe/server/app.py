"""FastAPI front-end that routes messages to registered agents."""

from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from troupe import __version__
from troupe.errors import EngineNotConfiguredError
from troupe.observability.logging import get_logger
from troupe.runtime.models import IncomingMessage
from troupe.server.registry import AgentRegistry

logger = get_logger(__name__)


class AgentSummary(BaseModel):
    id: str
    name: str
    clients: list[str]


def create_app(registry: AgentRegistry) -> FastAPI:
    """Create the message API bound to `registry`.

    Routes:
        GET  /health
        GET  /agents
        POST /{agent_id}/message
    """
    app = FastAPI(title="Troupe", version=__version__)
    app.state.registry = registry

    @app.exception_handler(EngineNotConfiguredError)
    async def engine_not_configured_handler(
        request: Request, exc: EngineNotConfiguredError
    ) -> JSONResponse:
        logger.warning("engine_not_configured", path=request.url.path, message=exc.message)
        return JSONResponse(status_code=503, content={"error": exc.message})

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"status": "ok", "agents": len(registry)}

    @app.get("/agents")
    async def list_agents() -> dict[str, list[AgentSummary]]:
        return {
            "agents": [
                AgentSummary(
                    id=str(runtime.agent_id),
                    name=runtime.name,
                    clients=[client.name for client in runtime.clients],
                )
                for runtime in registry
            ]
        }

    @app.post("/{agent_id}/message")
    async def message(agent_id: str, body: IncomingMessage) -> list[dict[str, Any]]:
        runtime = registry.get(agent_id)
        if runtime is None:
            raise HTTPException(status_code=404, detail=f"Agent not found: {agent_id}")

        logger.debug("message_received", agent_name=runtime.name, user_id=body.user_id)
        replies = await runtime.handle_message(body)
        return [reply.to_wire() for reply in replies]

    return app
