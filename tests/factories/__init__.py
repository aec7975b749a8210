"""Test factories for creating test data."""

from tests.factories.characters import CharacterFactory
from tests.factories.clients import FailingClientInterface, FakeClient, FakeClientInterface
from tests.factories.engines import EchoEngine, TickingEchoEngine, echo_engine_factory

__all__ = [
    "CharacterFactory",
    "EchoEngine",
    "FailingClientInterface",
    "FakeClient",
    "FakeClientInterface",
    "TickingEchoEngine",
    "echo_engine_factory",
]
