"""Exception hierarchy for agent startup.

Load errors are fatal for the process. Startup errors are scoped to one
character and carry the lifecycle state where they happened.
"""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from troupe.orchestrator import AgentStartupState


class TroupeError(Exception):
    """Base exception for all Troupe errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class CharacterLoadError(TroupeError):
    """Raised when an explicitly named character file cannot be loaded."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"Error loading character from {path}: {cause}", cause=cause)
        self.path = path


class AgentStartupError(TroupeError):
    """Raised when one character fails to reach the registered state."""

    def __init__(
        self,
        character_name: str,
        state: "AgentStartupState",
        cause: Exception,
    ) -> None:
        super().__init__(
            f"Error starting agent for character {character_name} "
            f"during {state.value}: {cause}",
            cause=cause,
        )
        self.character_name = character_name
        self.state = state


class UnknownClientError(TroupeError):
    """Raised when a character declares a client type nobody provides."""

    def __init__(self, client_type: str, available: list[str]) -> None:
        super().__init__(
            f"Unknown client type: {client_type}. Available: {available}"
        )
        self.client_type = client_type


class EngineNotConfiguredError(TroupeError):
    """Raised when a runtime is asked to respond without a message engine."""
