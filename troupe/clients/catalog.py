"""Catalog of client implementations, looked up by type name.

Character files name clients by string ("auto", "discord", ...). The
catalog maps those names to ClientInterface implementations so the
attacher never inspects plugin shapes. Platform integrations register
themselves with `register()`.
"""

from troupe.clients.auto import AutoClientInterface
from troupe.clients.base import ClientInterface
from troupe.config.settings import Settings
from troupe.errors import UnknownClientError


class ClientCatalog:
    """Registry of ClientInterface implementations keyed by lower-case name."""

    def __init__(self, interfaces: list[ClientInterface] | None = None) -> None:
        self._interfaces: dict[str, ClientInterface] = {}
        for interface in interfaces or []:
            self.register(interface)

    def register(self, interface: ClientInterface, name: str | None = None) -> None:
        """Register an implementation, replacing any previous one with the same name."""
        self._interfaces[(name or interface.name).lower()] = interface

    def get(self, client_type: str) -> ClientInterface:
        """Look up an implementation by type name (case-insensitive).

        Raises:
            UnknownClientError: If no implementation is registered
        """
        interface = self._interfaces.get(client_type.strip().lower())
        if interface is None:
            raise UnknownClientError(client_type, self.available_types)
        return interface

    def __contains__(self, client_type: str) -> bool:
        return client_type.strip().lower() in self._interfaces

    @property
    def available_types(self) -> list[str]:
        return list(self._interfaces)


def default_catalog(settings: Settings) -> ClientCatalog:
    """Catalog holding the built-in clients."""
    return ClientCatalog([
        AutoClientInterface(interval=settings.clients.auto_interval_seconds),
    ])
