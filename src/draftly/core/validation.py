"""
Validate decoded JSON against a schema node.

Each node is mapped to a strict pydantic annotation and checked with a :class:`TypeAdapter`:

* strings, numbers and booleans are never coerced (``5`` is not a string, ``true`` is not a number)
* optional object fields may be absent but not ``null``
* unknown object keys are dropped from the result
* unrecognised nodes accept anything
"""

import logging
from typing import (
    Annotated,
    Any,
    Dict,
    List,
    Literal,
    Type,
    Union,
)

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    create_model,
)

from draftly.core.errors import SchemaValidationError
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

logger = logging.getLogger(__name__)


def _object_model(node: ObjectNode) -> Type[BaseModel]:
    # Field names are positional and the JSON keys are aliases, so keys such as "model_config" or
    # "_private" never clash with BaseModel attributes.
    fields: Dict[str, Any] = {}
    for index, (name, field) in enumerate(node.shape.items()):
        if isinstance(field, OptionalNode):
            fields[f"f{index}"] = (annotation_for(field.inner), Field(None, alias=name))
        else:
            fields[f"f{index}"] = (annotation_for(field), Field(..., alias=name))
    return create_model(  # type: ignore[call-overload]
        "ObjectValue",
        __config__=ConfigDict(extra="ignore"),
        **fields,
    )


def annotation_for(node: SchemaNode) -> Any:
    """Return the pydantic annotation that accepts exactly the values *node* describes."""
    if isinstance(node, ObjectNode):
        return _object_model(node)
    if isinstance(node, StringNode):
        return StrictStr
    if isinstance(node, NumberNode):
        return Union[StrictInt, StrictFloat]
    if isinstance(node, BooleanNode):
        return StrictBool
    if isinstance(node, ArrayNode):
        return Annotated[
            List[annotation_for(node.element)],  # type: ignore[misc]
            Field(min_length=node.min_items, max_length=node.max_items),
        ]
    if isinstance(node, EnumNode):
        return Literal[tuple(node.values)]  # type: ignore[valid-type]
    if isinstance(node, OptionalNode):
        # Outside an object there is nothing to omit, so only the inner shape is accepted
        return annotation_for(node.inner)
    return Any


def validate_value(node: SchemaNode, value: Any) -> Any:
    """
    Check *value* against *node* and return the validated value as plain Python data.

    Raises
    ------
    SchemaValidationError
        If *value* does not match.  ``errors`` holds pydantic's structured diagnostics.
    """
    adapter: TypeAdapter[Any] = TypeAdapter(annotation_for(node))
    try:
        validated = adapter.validate_python(value)
    except ValidationError as exc:
        logger.debug("Schema validation failed: %s", exc)
        raise SchemaValidationError(
            f"Response does not match schema: {exc}", errors=exc.errors(include_url=False)
        ) from exc
    return adapter.dump_python(validated, by_alias=True, exclude_unset=True)
