"""Compile :mod:`draftly.core.schema` nodes to JSON-Schema documents for OpenAI-style requests."""

from typing import (
    Any,
    Dict,
)

from draftly.core.schema import (
    ArrayNode,
    BooleanNode,
    EnumNode,
    NumberNode,
    ObjectNode,
    OptionalNode,
    SchemaNode,
    StringNode,
)

JSONSchemaDoc = Dict[str, Any]

_FALLBACK: JSONSchemaDoc = {"type": "string"}


def _prune(doc: JSONSchemaDoc) -> JSONSchemaDoc:
    """Drop keys whose value is ``None``."""
    return {key: value for key, value in doc.items() if value is not None}


def compile_schema(node: SchemaNode) -> JSONSchemaDoc:
    """
    Translate *node* into an equivalent JSON-Schema document.

    Never raises: nodes of an unknown type compile to ``{"type": "string"}``.

    Object schemas are strict (``additionalProperties: false``) at every depth.  A field wrapped in
    :class:`OptionalNode` is left out of ``required``; when no field is required the ``required``
    key is omitted altogether.  Optional wrappers are otherwise invisible in the output.
    """
    if isinstance(node, ObjectNode):
        properties: Dict[str, JSONSchemaDoc] = {
            name: compile_schema(field) for name, field in node.shape.items()
        }
        required = node.required_fields()

        doc: JSONSchemaDoc = {"type": "object", "properties": properties}
        if required:
            doc["required"] = required
        doc["additionalProperties"] = False
        return doc

    if isinstance(node, (StringNode, NumberNode, BooleanNode)):
        return _prune({"type": node.kind, "description": node.description})

    if isinstance(node, ArrayNode):
        return _prune(
            {
                "type": "array",
                "items": compile_schema(node.element),
                "description": node.description,
                "minItems": node.min_items,
                "maxItems": node.max_items,
            }
        )

    if isinstance(node, EnumNode):
        return _prune(
            {"type": "string", "enum": list(node.values), "description": node.description}
        )

    if isinstance(node, OptionalNode):
        return compile_schema(node.inner)

    return dict(_FALLBACK)
