"""Command-line entry point.

Starts the front-end service, loads characters, starts one agent per
character, then hands the terminal to the chat bridge.

Exit codes:
    0  `exit` typed or interrupted
    1  a named character file failed to load, or startup failed with
       orchestrator.fail_fast enabled, or an unexpected error
"""

import argparse
import asyncio
import sys

from troupe.bridge import ChatBridge
from troupe.characters.loader import load_characters
from troupe.config import get_settings
from troupe.config.settings import Settings
from troupe.errors import AgentStartupError, CharacterLoadError
from troupe.observability.logging import get_logger, setup_logging
from troupe.orchestrator import AgentOrchestrator
from troupe.runtime.factory import load_engine_factory
from troupe.server.direct import DirectServer
from troupe.server.registry import AgentRegistry

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="troupe",
        description="Start agents from character files and chat with the first one",
        exit_on_error=False,
    )
    parser.add_argument("--character", help="Path to the character JSON file")
    parser.add_argument(
        "--characters",
        help="Comma separated list of paths to character JSON files",
    )
    parser.add_argument(
        "--no-chat",
        action="store_true",
        help="Serve the agents without opening the terminal chat",
    )
    return parser


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Bad arguments are logged and treated as no arguments at all, so the
    process still starts with the default character. Unknown flags are
    logged and ignored.
    """
    parser = _build_parser()
    try:
        args, unknown = parser.parse_known_args(argv)
    except argparse.ArgumentError as e:
        logger.error("argument_parse_failed", error=str(e))
        return argparse.Namespace(character=None, characters=None, no_chat=False)

    if unknown:
        logger.warning("unknown_arguments_ignored", arguments=unknown)
    return args


async def run(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """Run Troupe and return the process exit code."""
    settings = settings or get_settings()
    args = parse_arguments(argv)

    characters_arg = args.characters or args.character
    logger.info("characters_argument", value=characters_arg)
    try:
        characters = load_characters(characters_arg, settings.orchestrator.characters_dir)
    except CharacterLoadError as e:
        logger.error("character_load_fatal", path=str(e.path), error=str(e.cause))
        return 1

    engine_factory = None
    if settings.orchestrator.engine_factory:
        engine_factory = load_engine_factory(settings.orchestrator.engine_factory)

    registry = AgentRegistry()
    server = None
    if settings.server.enabled:
        server = DirectServer(registry, host=settings.server.host, port=settings.server_port)
        await server.start()

    orchestrator = AgentOrchestrator(settings, registry, engine_factory=engine_factory)
    try:
        try:
            report = await orchestrator.start_agents(characters)
        except AgentStartupError as e:
            logger.error("agent_startup_fatal", agent_name=e.character_name, error=str(e.cause))
            return 1

        if not report.ok:
            logger.warning(
                "some_agents_failed",
                failed=[f.character_name for f in report.failures],
            )

        if args.no_chat:
            if server is not None:
                await server.wait()
            return 0

        bridge = ChatBridge(
            agent_id=characters[0].name,
            base_url=settings.api_url,
            port=settings.server_port,
        )
        return await bridge.run()
    finally:
        await orchestrator.stop_all()
        if server is not None:
            await server.stop()


def main(argv: list[str] | None = None) -> None:
    """Console script entry point."""
    settings = get_settings()
    obs = settings.observability
    setup_logging(level=obs.log_level, format=obs.log_format, redact_secrets=obs.redact_secrets)

    try:
        code = asyncio.run(run(argv, settings))
    except KeyboardInterrupt:
        code = 0
    except Exception as e:
        logger.exception("unhandled_startup_error", error=str(e))
        code = 1
    sys.exit(code)
