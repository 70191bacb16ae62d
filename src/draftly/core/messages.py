"""
Message and result models exchanged with the chat-completion endpoint.

These data models are the contract between the completion client, the tool executor and callers.
They are kept apart from runtime logic so they can be imported anywhere without side-effects.
"""

import json
from typing import (
    Any,
    Dict,
    List,
    Literal,
    Optional,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
)

from draftly.core.errors import (
    MalformedResponse,
    MalformedToolArgs,
)

Role = Literal["system", "user", "assistant", "tool"]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"'{name}' is not valid JSON")


def loads_json(text: str) -> Any:
    """``json.loads`` that also rejects ``NaN``, ``Infinity`` and ``-Infinity``."""
    return json.loads(text, parse_constant=_reject_constant)


class Message(BaseModel):
    """One chat message.  Extra keys returned by the endpoint are kept and sent back verbatim."""

    model_config = ConfigDict(extra="allow")

    role: Role
    content: Optional[str] = None
    tool_call_id: Optional[str] = None
    name: Optional[str] = None
    tool_calls: Optional[List[Dict[str, Any]]] = None

    def to_wire(self) -> Dict[str, Any]:
        """Serialise only the keys that were actually set."""
        return self.model_dump(exclude_unset=True)


class Transcript:
    """Append-only, ordered list of :class:`Message` owned by a single client call."""

    def __init__(self) -> None:
        self._messages: List[Message] = []

    @classmethod
    def start(cls, prompt: str, system: str | None = None) -> "Transcript":
        """Optional system message followed by the user prompt."""
        transcript = cls()
        if system:
            transcript.append(Message(role="system", content=system))
        transcript.append(Message(role="user", content=prompt))
        return transcript

    def append(self, message: Message) -> None:
        self._messages.append(message)

    @property
    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def to_wire(self) -> List[Dict[str, Any]]:
        return [message.to_wire() for message in self._messages]


class ToolCallRequest(BaseModel):
    """A tool call the model asked for in an assistant message."""

    id: str = Field(..., description="Call id echoed back in the tool result message")
    function_name: str = Field(..., description="Name of the requested tool")
    raw_arguments: str = Field("{}", description="JSON-encoded arguments, as sent by the model")

    @classmethod
    def from_wire(cls, call: Dict[str, Any]) -> "ToolCallRequest":
        """
        Build from ``{"id": ..., "function": {"name": ..., "arguments": "<json>"}}``.

        Raises :class:`MalformedResponse` if the entry does not have that shape.
        """
        try:
            function = call.get("function") or {}
            return cls(
                id=call.get("id", ""),
                function_name=function.get("name", ""),
                raw_arguments=function.get("arguments") or "{}",
            )
        except (AttributeError, ValidationError) as exc:
            raise MalformedResponse(f"Malformed tool call in response: {call!r}") from exc

    def parse_arguments(self) -> Any:
        """Decode :attr:`raw_arguments`, raising :class:`MalformedToolArgs` if it is not JSON."""
        try:
            return loads_json(self.raw_arguments)
        except ValueError as exc:  # includes json.JSONDecodeError
            raise MalformedToolArgs(
                f"Invalid JSON arguments for tool '{self.function_name}': {exc}"
            ) from exc


class GenerateTextResult(BaseModel):
    """Final text of a :meth:`~draftly.core.client.OpenRouterClient.generate_text` call."""

    text: str
    tool_calls: Optional[List[Any]] = None  # not populated; only the final text is reported


class GenerateObjectResult(BaseModel):
    """Validated value of a :meth:`~draftly.core.client.OpenRouterClient.generate_object` call."""

    object: Any
