"""Terminal chat bridge to a running agent.

The bridge talks to the agent the same way any remote caller would: one
HTTP POST per line typed, to the front-end service's message route. It
holds no reference to in-process runtimes.

Requests have no timeout. A request that never completes blocks the
prompt until the user interrupts.
"""

from collections.abc import Awaitable, Callable
from typing import Any
from urllib.parse import quote

import httpx
from prompt_toolkit import PromptSession

from troupe.observability.logging import get_logger

logger = get_logger(__name__)

EXIT_COMMAND = "exit"
USER_ID = "user"
USER_NAME = "User"
AGENT_LABEL = "Agent"

ReadLine = Callable[[str], Awaitable[str]]
Write = Callable[[str], None]


class MalformedReplyError(ValueError):
    """Raised when the service answers with something other than a message list."""


def parse_replies(payload: Any) -> list[str]:
    """Extract reply texts from a message route response.

    Raises:
        MalformedReplyError: If the payload is not a list of objects with `text`
    """
    if not isinstance(payload, list):
        raise MalformedReplyError(f"Expected a list of messages, got {type(payload).__name__}")

    texts = []
    for message in payload:
        if not isinstance(message, dict) or "text" not in message:
            raise MalformedReplyError(f"Message without text: {message!r}")
        texts.append(str(message["text"]))
    return texts


class ChatBridge:
    """Line-oriented chat loop against `{base_url}:{port}/{agent_id}/message`.

    Args:
        agent_id: Agent address, fixed for the bridge's lifetime (the first
            character's name)
        base_url: Service base URL without port, e.g. http://localhost
        port: Service port
        client: HTTP client (one without a timeout is created if omitted)
        read_line: Coroutine returning one line of input for a prompt
        write: Output sink for agent replies
    """

    def __init__(
        self,
        agent_id: str,
        base_url: str,
        port: int,
        client: httpx.AsyncClient | None = None,
        read_line: ReadLine | None = None,
        write: Write = print,
    ) -> None:
        self.agent_id = agent_id
        self.url = f"{base_url.rstrip('/')}:{port}/{quote(agent_id, safe='')}/message"
        self._client = client or httpx.AsyncClient(timeout=None)
        self._owns_client = client is None
        self._read_line = read_line or PromptSession().prompt_async
        self._write = write

    async def send(self, text: str) -> list[str]:
        """Post one message and return the agent's reply texts.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx status
            ValueError: If the body is not JSON or not a message list
        """
        response = await self._client.post(
            self.url,
            json={"text": text, "userId": USER_ID, "userName": USER_NAME},
        )
        response.raise_for_status()
        return parse_replies(response.json())

    async def exchange(self, text: str) -> None:
        """Send one line and print the replies. Failures are logged, not raised."""
        try:
            replies = await self.send(text)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(
                "chat_request_failed",
                agent=self.agent_id,
                url=self.url,
                error=str(e),
                error_type=type(e).__name__,
            )
            return

        for reply in replies:
            self._write(f"{AGENT_LABEL}: {reply}")

    async def run(self) -> int:
        """Prompt, send, print, repeat.

        Returns:
            Process exit code: 0 on `exit` or interrupt
        """
        logger.info("chat_started", agent=self.agent_id, url=self.url)
        self._write("Chat started. Type 'exit' to quit.")
        try:
            while True:
                try:
                    line = await self._read_line("You: ")
                except (KeyboardInterrupt, EOFError):
                    logger.info("chat_interrupted")
                    return 0

                if line.strip().lower() == EXIT_COMMAND:
                    logger.info("chat_exit_requested")
                    return 0

                await self.exchange(line)
        finally:
            await self.close()

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
