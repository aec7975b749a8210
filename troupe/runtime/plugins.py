"""Capability plugins bundled into every runtime.

A plugin contributes actions, providers, evaluators and services that the
engine can use. The two baseline plugins are always installed regardless
of what the character declares; their contents are filled in by the engine
package that registers against them.
"""

from dataclasses import dataclass, field
from typing import Any

from troupe.runtime.engine import Service


@dataclass
class Plugin:
    """A named bundle of engine capabilities."""

    name: str
    description: str = ""
    actions: list[Any] = field(default_factory=list)
    providers: list[Any] = field(default_factory=list)
    evaluators: list[Any] = field(default_factory=list)
    services: list[Service] = field(default_factory=list)


bootstrap_plugin = Plugin(
    name="bootstrap",
    description="Core conversation actions, evaluators and providers",
)

node_plugin = Plugin(
    name="node",
    description="Host services: filesystem, HTTP fetching, media handling",
)


def baseline_plugins() -> list[Plugin]:
    """Plugins every runtime starts with."""
    return [bootstrap_plugin, node_plugin]
