"""
Tool definitions for the completion client.

A tool is a plain mapping with a description, a schema node describing its input and an
``execute`` callable.  Callers hand a ``{name: ToolDefinition}`` mapping to ``generate_text``; the
client advertises each tool to the model and calls ``execute`` with the decoded arguments when the
model asks for it:

    weather = create_tool(
        description="Current weather for a city",
        input_schema=ObjectNode(shape={"city": StringNode()}),
        execute=fetch_weather,
    )
    await client.generate_text(model, prompt, tools={"weather": weather})

``execute`` may be a coroutine function or a plain function.
"""

import logging
from typing import (
    Any,
    Callable,
    List,
    Mapping,
    TypedDict,
)

from draftly.core.json_schema import (
    JSONSchemaDoc,
    compile_schema,
)
from draftly.core.schema import SchemaNode

logger = logging.getLogger(__name__)


class ToolDefinition(TypedDict):
    """
    A caller-owned tool.
    """

    description: str
    input_schema: SchemaNode
    execute: Callable[[Any], Any]


ToolSet = Mapping[str, ToolDefinition]
"""Tool definitions keyed by the name the model calls them by."""


class FunctionSpec(TypedDict):
    """
    Function part of a tool manifest entry.
    """

    name: str
    description: str
    parameters: JSONSchemaDoc


class ToolManifestEntry(TypedDict):
    """
    One entry of the ``tools`` array sent to the endpoint
    """

    type: str
    function: FunctionSpec


def create_tool(
    description: str, input_schema: SchemaNode, execute: Callable[[Any], Any]
) -> ToolDefinition:
    """Bundle the three parts of a tool.  No validation is done."""
    return ToolDefinition(description=description, input_schema=input_schema, execute=execute)


def build_tool_manifest(tools: ToolSet) -> List[ToolManifestEntry]:
    """Compile every tool's input schema into the OpenAI-style ``tools`` array, in mapping order."""
    manifest: List[ToolManifestEntry] = []
    for name, tool in tools.items():
        logger.debug("Advertising tool '%s'", name)
        manifest.append(
            ToolManifestEntry(
                type="function",
                function=FunctionSpec(
                    name=name,
                    description=tool["description"],
                    parameters=compile_schema(tool["input_schema"]),
                ),
            )
        )
    return manifest
