"""Agent runtime layer.

Key components:
- AgentRuntime: live state for one character
- create_agent: builds a runtime with the baseline plugins
- MessageEngine: the contract the reasoning engine implements
"""

from troupe.runtime.engine import MessageEngine, Service, TickingEngine
from troupe.runtime.factory import EngineFactory, create_agent, load_engine_factory
from troupe.runtime.models import IncomingMessage, ResponseContent
from troupe.runtime.plugins import Plugin, baseline_plugins, bootstrap_plugin, node_plugin
from troupe.runtime.runtime import AgentRuntime

__all__ = [
    "AgentRuntime",
    "EngineFactory",
    "IncomingMessage",
    "MessageEngine",
    "Plugin",
    "ResponseContent",
    "Service",
    "TickingEngine",
    "baseline_plugins",
    "bootstrap_plugin",
    "create_agent",
    "load_engine_factory",
    "node_plugin",
]
