"""
OpenRouter completion client.

This module is the only place that *directly* calls the chat-completion endpoint.  It offers two
entry points:

1. :meth:`OpenRouterClient.generate_text` - multi-step generation; the model may call tools, their
   results are fed back, and the loop stops when the model answers without tool calls, when the
   caller's ``stop_when`` predicate says so, or after :data:`MAX_STEPS` round trips.
2. :meth:`OpenRouterClient.generate_object` - a single JSON-mode request whose reply is validated
   against a schema node.

Each call owns its transcript and step counter, so one client can serve concurrent calls.
"""

import json
import logging
from types import TracebackType
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Type,
)

import httpx

from draftly.config import (
    Settings,
    settings,
)
from draftly.core.errors import (
    MalformedResponse,
    TransportError,
)
from draftly.core.json_schema import compile_schema
from draftly.core.messages import (
    GenerateObjectResult,
    GenerateTextResult,
    Message,
    ToolCallRequest,
    Transcript,
    loads_json,
)
from draftly.core.schema import SchemaNode
from draftly.core.tool_executor import execute_tool_call
from draftly.core.validation import validate_value
from draftly.tools import (
    ToolSet,
    build_tool_manifest,
)

logger = logging.getLogger(__name__)

MAX_STEPS = 10
"""Hard ceiling on round trips per ``generate_text`` call, whatever ``stop_when`` says."""

DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.7

StopCondition = Callable[[int], bool]


def step_count_is(count: int) -> StopCondition:
    """Return a ``stop_when`` predicate that is true once *count* steps have run."""

    def predicate(current: int) -> bool:
        return current >= count

    return predicate


class OpenRouterClient:
    """Async client for the OpenRouter chat-completion endpoint.

    Parameters
    ----------
    config:
        Settings to read the endpoint, API key and headers from (default: module ``settings``).
    http_client:
        An existing :class:`httpx.AsyncClient` to borrow.  If *None*, the client creates one and
        closes it in :meth:`aclose`.
    """

    def __init__(
        self, config: Settings | None = None, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self._settings = config or settings
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self._settings.HTTP_TIMEOUT)

    async def __aenter__(self) -> "OpenRouterClient":
        return self

    async def __aexit__(
        self,
        exc_type: Type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http:
            await self._http.aclose()

    # ------------------------------------------------------------------ #
    # HTTP
    # ------------------------------------------------------------------ #
    def _headers(self) -> Dict[str, str]:
        api_key = self._settings.OPENROUTER_API_KEY
        if not api_key:
            logger.warning("OPENROUTER_API_KEY is not set; the request will likely be rejected")
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key or ''}",
            "HTTP-Referer": self._settings.referer,
            "X-Title": self._settings.APP_TITLE,
        }

    async def _complete(self, payload: Dict[str, Any]) -> Message:
        """POST *payload* and return the first choice's message."""
        url = self._settings.OPENROUTER_URL
        logger.debug(
            "POST %s model=%s messages=%d", url, payload["model"], len(payload["messages"])
        )

        try:
            resp = await self._http.post(url, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.error("OpenRouter request error: %s", str(exc))
            raise TransportError(f"OpenRouter request failed: {exc}") from exc

        if not resp.is_success:
            logger.error("OpenRouter returned HTTP %d", resp.status_code)
            raise TransportError(
                f"OpenRouter API error: {resp.text}", status_code=resp.status_code, body=resp.text
            )

        try:
            return Message.model_validate(resp.json()["choices"][0]["message"])
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            # pydantic.ValidationError is a ValueError
            raise MalformedResponse(f"Unexpected OpenRouter response: {resp.text}") from exc

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    async def generate_text(
        self,
        model: str,
        prompt: str,
        system: str | None = None,
        tools: ToolSet | None = None,
        stop_when: StopCondition | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> GenerateTextResult:
        """
        Run the tool-calling conversation and return the final assistant text.

        The text is the content of the last transcript entry when that entry is an assistant
        message, otherwise ``""`` (for instance when ``stop_when`` ends the loop right after tool
        results were appended).

        Raises
        ------
        TransportError
            On HTTP failure or a non-success status; the message carries the response body.
        MalformedResponse
            If the reply or one of its tool calls does not have the expected shape.
        MalformedToolArgs
            If the model sends tool arguments that are not valid JSON.
        ToolExecutionError
            If a tool raises.
        """
        transcript = Transcript.start(prompt, system)
        manifest = build_tool_manifest(tools) if tools else []
        tool_set: ToolSet = tools or {}

        step_count = 0
        while step_count < MAX_STEPS:
            payload: Dict[str, Any] = {
                "model": model,
                "messages": transcript.to_wire(),
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
            if manifest:
                payload["tools"] = manifest

            reply = await self._complete(payload)
            transcript.append(reply)
            step_count += 1

            calls: List[ToolCallRequest] = [
                ToolCallRequest.from_wire(call) for call in reply.tool_calls or []
            ]
            if not calls:
                logger.debug("Step %d: no tool calls, conversation complete", step_count)
                break

            logger.debug(
                "Step %d: model requested %d tool calls: %s",
                step_count,
                len(calls),
                [call.function_name for call in calls],
            )
            for call in calls:
                result = await execute_tool_call(tool_set, call)
                if result is not None:
                    transcript.append(result)

            if stop_when is not None and stop_when(step_count):
                logger.debug("Step %d: stop condition met", step_count)
                break
        else:
            logger.info("Stopped after reaching the %d-step limit", MAX_STEPS)

        last = transcript.last
        text = (last.content or "") if last is not None and last.role == "assistant" else ""
        return GenerateTextResult(text=text)

    async def generate_object(
        self,
        model: str,
        prompt: str,
        schema: SchemaNode,
        system: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> GenerateObjectResult:
        """
        Ask for a JSON reply matching *schema* and return it validated.

        Raises
        ------
        TransportError
            On HTTP failure or a non-success status.
        MalformedResponse
            If the reply content is not valid JSON.
        SchemaValidationError
            If the JSON does not match *schema*.
        """
        json_schema = compile_schema(schema)

        transcript = Transcript()
        if system:
            transcript.append(Message(role="system", content=system))
        transcript.append(
            Message(
                role="user",
                content=(
                    f"{prompt}\n\nYou must respond with valid JSON matching this schema:\n"
                    f"{json.dumps(json_schema, indent=2)}"
                ),
            )
        )

        reply = await self._complete(
            {
                "model": model,
                "messages": transcript.to_wire(),
                "max_tokens": max_tokens,
                "temperature": temperature,
                "response_format": {"type": "json_object"},
            }
        )

        try:
            parsed = loads_json(reply.content)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            logger.error("Structured reply is not JSON: %r", reply.content)
            raise MalformedResponse(f"Response is not valid JSON: {reply.content!r}") from exc

        return GenerateObjectResult(object=validate_value(schema, parsed))


# ---------------------------------------------------------------------------
# Module-level helpers using a short-lived client built from ``settings``
# ---------------------------------------------------------------------------
async def generate_text(model: str, prompt: str, **kwargs: Any) -> GenerateTextResult:
    """Shortcut for :meth:`OpenRouterClient.generate_text` with a one-off client."""
    async with OpenRouterClient() as client:
        return await client.generate_text(model, prompt, **kwargs)


async def generate_object(
    model: str, prompt: str, schema: SchemaNode, **kwargs: Any
) -> GenerateObjectResult:
    """Shortcut for :meth:`OpenRouterClient.generate_object` with a one-off client."""
    async with OpenRouterClient() as client:
        return await client.generate_object(model, prompt, schema, **kwargs)
