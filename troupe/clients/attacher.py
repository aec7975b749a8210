"""Starts the communication clients a character declares."""

from troupe.characters.models import Character
from troupe.clients.base import Client
from troupe.clients.catalog import ClientCatalog
from troupe.observability.logging import get_logger
from troupe.runtime.runtime import AgentRuntime

logger = get_logger(__name__)


def declared_client_types(character: Character) -> list[str]:
    """Client type names in start order.

    The character's own clients come first, then each plugin's clients in
    plugin order. Names are lower-cased.
    """
    types = [c.lower() for c in character.clients]
    for plugin in character.plugins:
        types.extend(c.lower() for c in plugin.clients)
    return types


async def initialize_clients(
    character: Character,
    runtime: AgentRuntime,
    catalog: ClientCatalog,
) -> list[Client]:
    """Start every declared client against `runtime`.

    Args:
        character: Character declaring the clients
        runtime: Initialized runtime the clients attach to
        catalog: Where client implementations are looked up

    Returns:
        Started clients, in start order. Declared types with no
        implementation, and clients whose start routine returned nothing,
        are left out.

    Clients already started are stopped again if a later one fails.
    """
    clients: list[Client] = []
    try:
        for client_type in declared_client_types(character):
            if client_type not in catalog:
                logger.warning(
                    "client_type_unavailable",
                    client=client_type,
                    agent_name=character.name,
                    available=catalog.available_types,
                )
                continue
            interface = catalog.get(client_type)
            client = await interface.start(runtime)
            if not client:
                logger.warning(
                    "client_start_skipped", client=client_type, agent_name=character.name
                )
                continue
            logger.info("client_started", client=client_type, agent_name=character.name)
            clients.append(client)
    except Exception:
        for started in reversed(clients):
            await started.stop()
        raise

    return clients
