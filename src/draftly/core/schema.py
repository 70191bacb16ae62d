"""
Schema node definitions.

A schema is a tree of immutable nodes describing the shape of a value: objects with named fields,
strings, numbers, booleans, arrays, string enums and optional wrappers.  The same tree is compiled
to JSON-Schema for the LLM (:mod:`draftly.core.json_schema`) and used to validate what the LLM
sends back (:mod:`draftly.core.validation`).

    ObjectNode(shape={"name": StringNode(), "tags": ArrayNode(element=StringNode()).optional()})
"""

from __future__ import annotations

from typing import (
    Dict,
    List,
    Literal,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class SchemaNode(BaseModel):
    """Base class of every schema node."""

    model_config = ConfigDict(frozen=True)

    description: str | None = None

    def optional(self) -> "OptionalNode":
        """Wrap this node so the enclosing object does not require it."""
        return OptionalNode(inner=self)

    def describe(self, text: str) -> "SchemaNode":
        """Return a copy of this node carrying *text* as its description."""
        return self.model_copy(update={"description": text})


class StringNode(SchemaNode):
    """Any string."""

    kind: Literal["string"] = "string"


class NumberNode(SchemaNode):
    """Any integer or float (booleans excluded)."""

    kind: Literal["number"] = "number"


class BooleanNode(SchemaNode):
    """``true`` or ``false``."""

    kind: Literal["boolean"] = "boolean"


class ArrayNode(SchemaNode):
    """A list whose items all match *element*."""

    kind: Literal["array"] = "array"
    element: SchemaNode
    min_items: int | None = Field(None, ge=0)
    max_items: int | None = Field(None, ge=0)


class EnumNode(SchemaNode):
    """One of a fixed, ordered set of strings."""

    kind: Literal["enum"] = "enum"
    values: List[str] = Field(..., min_length=1)


class OptionalNode(SchemaNode):
    """Marks *inner* as optional when used as an object field."""

    kind: Literal["optional"] = "optional"
    inner: SchemaNode

    def optional(self) -> "OptionalNode":
        return self


class ObjectNode(SchemaNode):
    """An object with named fields, kept in declaration order."""

    kind: Literal["object"] = "object"
    shape: Dict[str, SchemaNode] = Field(default_factory=dict)

    def required_fields(self) -> List[str]:
        """Names of the fields not wrapped in :class:`OptionalNode`, in declaration order."""
        return [name for name, node in self.shape.items() if not isinstance(node, OptionalNode)]
