"""Shared fixtures: a scripted OpenRouter endpoint served through ``httpx.MockTransport``."""

import json
from typing import (
    Any,
    Callable,
    Dict,
    List,
)

import httpx
import pytest

from draftly.config import Settings
from draftly.core.client import OpenRouterClient


def assistant(content: str | None = None, tool_calls: List[Dict[str, Any]] | None = None) -> Dict:
    """Build a successful completion body carrying one assistant message."""
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {"choices": [{"message": message}]}


def tool_call(call_id: str, name: str, arguments: Any = None) -> Dict[str, Any]:
    """Wire shape of one tool call; dict arguments are JSON-encoded, strings are sent as-is."""
    raw = arguments if isinstance(arguments, str) else json.dumps(arguments or {})
    return {"id": call_id, "type": "function", "function": {"name": name, "arguments": raw}}


class ScriptedEndpoint:
    """Replies with queued responses in order, repeating the last one when the queue runs dry."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.requests: List[Dict[str, Any]] = []
        self.headers: List[httpx.Headers] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        self.headers.append(request.headers)
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from the process environment and any .env file."""
    return Settings(
        _env_file=None,
        OPENROUTER_API_KEY="test-key",
        OPENROUTER_URL="https://openrouter.test/api/v1/chat/completions",
        APP_URL=None,
    )


@pytest.fixture
def make_client(test_settings: Settings) -> Callable[[ScriptedEndpoint], OpenRouterClient]:
    """Factory returning a client whose HTTP traffic goes to *endpoint*."""

    def factory(endpoint: ScriptedEndpoint) -> OpenRouterClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(endpoint))
        return OpenRouterClient(config=test_settings, http_client=http)

    return factory
