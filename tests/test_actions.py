"""Tests for the project-name helper and the command line."""

import asyncio
from typing import Callable

import httpx
import pytest
from conftest import (
    ScriptedEndpoint,
    assistant,
)

from draftly import main as cli
from draftly.actions import (
    FALLBACK_PROJECT_NAME,
    PROJECT_NAME_PROMPT,
    generate_project_name,
)
from draftly.core.client import OpenRouterClient
from draftly.core.errors import TransportError
from draftly.core.messages import GenerateTextResult

ClientFactory = Callable[[ScriptedEndpoint], OpenRouterClient]


def test_project_name_is_stripped(make_client: ClientFactory) -> None:
    """The model's answer is returned without surrounding whitespace."""

    endpoint = ScriptedEndpoint(assistant("  Recipe Planner \n"))
    client = make_client(endpoint)
    prompt = "an app to plan weekly meals"
    name = asyncio.run(generate_project_name(prompt, model="m", client=client))

    assert name == "Recipe Planner"
    messages = endpoint.requests[0]["messages"]
    assert messages[0] == {"role": "system", "content": PROJECT_NAME_PROMPT}
    assert messages[1]["content"] == "an app to plan weekly meals"


@pytest.mark.parametrize(
    "response",
    [
        assistant("   "),
        assistant(None),
        httpx.Response(402, text="Insufficient credits"),
        {"unexpected": True},
    ],
)
def test_project_name_fallback(make_client: ClientFactory, response: object) -> None:
    """Empty replies and every failure fall back to the default name."""

    endpoint = ScriptedEndpoint(response)
    name = asyncio.run(generate_project_name("x", client=make_client(endpoint)))
    assert name == FALLBACK_PROJECT_NAME


def test_cli_name(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """``draftly name`` prints the generated name."""

    async def fake(prompt: str, model: str | None = None) -> str:
        assert model == "some/model"
        return f"Name for {prompt}"

    monkeypatch.setattr(cli, "generate_project_name", fake)
    assert cli.main(["name", "todo app", "--model", "some/model"]) == 0
    assert "Name for todo app" in capsys.readouterr().out


def test_cli_ask(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """``draftly ask`` prints the final text."""

    async def fake(model: str, prompt: str, system: str | None = None) -> GenerateTextResult:
        return GenerateTextResult(text=f"{system}:{prompt}")

    monkeypatch.setattr(cli, "generate_text", fake)
    assert cli.main(["ask", "hello", "--system", "terse"]) == 0
    assert "terse:hello" in capsys.readouterr().out


def test_cli_ask_failure(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    """Completion errors are reported and give exit code 1."""

    async def fake(model: str, prompt: str, system: str | None = None) -> GenerateTextResult:
        raise TransportError("OpenRouter API error: nope")

    monkeypatch.setattr(cli, "generate_text", fake)
    assert cli.main(["ask", "hello"]) == 1
    assert "OpenRouter API error: nope" in capsys.readouterr().err
