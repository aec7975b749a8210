"""Agent registry and the HTTP front-end that serves it."""

from troupe.server.app import create_app
from troupe.server.direct import DirectServer
from troupe.server.registry import AgentRegistry

__all__ = ["AgentRegistry", "DirectServer", "create_app"]
