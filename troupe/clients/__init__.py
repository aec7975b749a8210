"""Communication clients: capability protocol, catalog and attachment."""

from troupe.clients.attacher import declared_client_types, initialize_clients
from troupe.clients.auto import AutoClient, AutoClientInterface
from troupe.clients.base import Client, ClientInterface
from troupe.clients.catalog import ClientCatalog, default_catalog

__all__ = [
    "AutoClient",
    "AutoClientInterface",
    "Client",
    "ClientCatalog",
    "ClientInterface",
    "declared_client_types",
    "default_catalog",
    "initialize_clients",
]
