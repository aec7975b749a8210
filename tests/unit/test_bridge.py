"""Unit tests for the terminal chat bridge."""

import json
from collections.abc import Callable

import httpx
import pytest

from troupe.bridge import ChatBridge, MalformedReplyError, parse_replies


class ScriptedInput:
    """Feeds prepared lines to the bridge; raises when an item is an exception."""

    def __init__(self, *lines: str | BaseException) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        item = self.lines.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


def make_bridge(
    handler: Callable[[httpx.Request], httpx.Response],
    read_line: ScriptedInput,
    output: list[str],
) -> ChatBridge:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ChatBridge(
        agent_id="Ada",
        base_url="http://localhost",
        port=3000,
        client=client,
        read_line=read_line,
        write=output.append,
    )


@pytest.fixture
def requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def echo_handler(requests: list[httpx.Request]) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        body = json.loads(request.content)
        return httpx.Response(200, json=[{"text": f"you said {body['text']}"}])

    return handler


class TestParseReplies:
    """Tests for parse_replies."""

    def test_extracts_texts(self) -> None:
        assert parse_replies([{"text": "a"}, {"text": "b", "action": "WAVE"}]) == ["a", "b"]

    def test_empty_list(self) -> None:
        assert parse_replies([]) == []

    @pytest.mark.parametrize("payload", [{"text": "a"}, "text", [{"action": "x"}], ["a"]])
    def test_malformed(self, payload) -> None:
        with pytest.raises(MalformedReplyError):
            parse_replies(payload)


class TestChatBridge:
    """Tests for ChatBridge."""

    def test_url(self) -> None:
        bridge = ChatBridge("Ada", "http://agents.internal/", 4100, read_line=ScriptedInput())
        assert bridge.url == "http://agents.internal:4100/Ada/message"

    async def test_agent_name_encoded_in_path(self, echo_handler, requests) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(echo_handler))
        bridge = ChatBridge(
            "Who? #1/2", "http://localhost", 3000, client=client, read_line=ScriptedInput()
        )

        await bridge.send("hi")

        assert requests[0].url.raw_path == b"/Who%3F%20%231%2F2/message"
        assert requests[0].url.query == b""

    async def test_exit_sends_nothing(self, echo_handler, requests) -> None:
        output: list[str] = []
        bridge = make_bridge(echo_handler, ScriptedInput("exit"), output)

        assert await bridge.run() == 0
        assert requests == []

    async def test_exit_case_and_whitespace_insensitive(self, echo_handler, requests) -> None:
        bridge = make_bridge(echo_handler, ScriptedInput("  EXIT \n"), [])
        assert await bridge.run() == 0
        assert requests == []

    async def test_one_post_per_line(self, echo_handler, requests) -> None:
        output: list[str] = []
        read_line = ScriptedInput("hello", "exit")
        bridge = make_bridge(echo_handler, read_line, output)

        assert await bridge.run() == 0

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://localhost:3000/Ada/message"
        assert json.loads(request.content) == {
            "text": "hello",
            "userId": "user",
            "userName": "User",
        }
        assert "Agent: you said hello" in output
        assert read_line.prompts == ["You: ", "You: "]

    async def test_every_reply_printed(self, requests) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"text": "one"}, {"text": "two"}])

        output: list[str] = []
        bridge = make_bridge(handler, ScriptedInput("hi", "exit"), output)
        await bridge.run()

        assert output[-2:] == ["Agent: one", "Agent: two"]

    async def test_server_error_keeps_loop_running(self) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            text = json.loads(request.content)["text"]
            calls.append(text)
            if text == "first":
                return httpx.Response(500, json={"error": "boom"})
            return httpx.Response(200, json=[{"text": "recovered"}])

        output: list[str] = []
        bridge = make_bridge(handler, ScriptedInput("first", "second", "exit"), output)

        assert await bridge.run() == 0
        assert calls == ["first", "second"]
        assert "Agent: recovered" in output

    async def test_connection_error_keeps_loop_running(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        bridge = make_bridge(handler, ScriptedInput("hi", "exit"), [])
        assert await bridge.run() == 0

    async def test_malformed_reply_keeps_loop_running(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"not": "a list"})

        output: list[str] = []
        bridge = make_bridge(handler, ScriptedInput("hi", "exit"), output)

        assert await bridge.run() == 0
        assert not any(line.startswith("Agent:") for line in output)

    async def test_non_json_reply_keeps_loop_running(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>")

        bridge = make_bridge(handler, ScriptedInput("hi", "exit"), [])
        assert await bridge.run() == 0

    @pytest.mark.parametrize("interrupt", [KeyboardInterrupt(), EOFError()])
    async def test_interrupt_exits_cleanly(
        self, echo_handler, requests, interrupt: BaseException
    ) -> None:
        bridge = make_bridge(echo_handler, ScriptedInput("hello", interrupt), [])

        assert await bridge.run() == 0
        assert len(requests) == 1

    async def test_send_raises_on_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"detail": "Agent not found: Ada"})

        bridge = make_bridge(handler, ScriptedInput(), [])
        with pytest.raises(httpx.HTTPStatusError):
            await bridge.send("hi")
