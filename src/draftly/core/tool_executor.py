"""Runs the tool calls requested by the model and wraps tool failures."""

import inspect
import logging

from pydantic_core import to_json

from draftly.core.errors import ToolExecutionError
from draftly.core.messages import (
    Message,
    ToolCallRequest,
)
from draftly.tools import ToolSet

logger = logging.getLogger(__name__)


async def execute_tool_call(tools: ToolSet, call: ToolCallRequest) -> Message | None:
    """
    Decode the arguments of *call*, run the matching tool and build the ``tool`` reply message.

    Parameters
    ----------
    tools:
        The caller's tool set, keyed by name.
    call:
        The call as emitted by the model.

    Returns
    -------
    Message | None
        The ``tool`` role message carrying the JSON-encoded result, or *None* when no tool of that
        name is registered.  Unknown names are skipped so a hallucinated tool does not abort the
        whole generation.

    Raises
    ------
    MalformedToolArgs
        If the arguments are not valid JSON (checked before the tool lookup).
    ToolExecutionError
        If the tool itself raises, or returns something that cannot be JSON-encoded.
    """
    args = call.parse_arguments()

    tool = tools.get(call.function_name)
    if tool is None:
        logger.debug("Skipping call '%s' to unregistered tool '%s'", call.id, call.function_name)
        return None

    try:
        logger.debug("Executing tool '%s' with args=%s", call.function_name, args)
        result = tool["execute"](args)
        if inspect.isawaitable(result):
            result = await result
        content = to_json(result).decode()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unhandled error in tool '%s'", call.function_name)
        raise ToolExecutionError(f"Tool '{call.function_name}' raised an error: {exc}") from exc

    return Message(
        role="tool",
        content=content,
        tool_call_id=call.id,
        name=call.function_name,
    )
