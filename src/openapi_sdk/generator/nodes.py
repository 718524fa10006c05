"""Tagged-variant trees for schemas and for the generated TypeScript types.

Two families of frozen Pydantic models live here:

**Schema nodes** -- a classification of one resolved JSON Schema object,
produced by :func:`parse_schema`. Classification is shallow: child schemas
stay raw and are classified when the type mapper reaches them, so a full
traversal visits each nesting level exactly once.

**Type nodes** -- the target type tree consumed by
:mod:`~openapi_sdk.generator.emitter`. Every node has a fixed variant and
the emitter dispatches over the variants explicitly.

Variants::

    SchemaNode                      TypeNode
    +-- ObjectSchema                +-- StructType (StructField ...)
    +-- MapSchema                   +-- DictionaryType
    +-- ArraySchema                 +-- ArrayType
    +-- PrimitiveSchema             +-- PrimitiveType
    +-- AllOfSchema                 +-- UnionType
    +-- UnknownSchema               +-- UnknownType
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


PrimitiveKind = Literal["string", "number", "boolean"]

_PRIMITIVE_KINDS: dict[str, PrimitiveKind] = {
    "integer": "number",
    "number": "number",
    "string": "string",
    "boolean": "boolean",
}


# ---------------------------------------------------------------------------
# Schema nodes
# ---------------------------------------------------------------------------


class SchemaNode(BaseModel):
    """Base class for every schema classification."""

    model_config = ConfigDict(frozen=True)


class ObjectSchema(SchemaNode):
    """A schema that declares ``properties``.

    ``properties`` keeps declaration order; ``required`` holds the names
    listed in the schema's ``required`` array.
    """

    properties: dict[Any, Any] = Field(default_factory=dict)
    required: frozenset[str] = frozenset()


class MapSchema(SchemaNode):
    """``type: object`` without ``properties`` -- a free-form map."""


class ArraySchema(SchemaNode):
    """``type: array``; ``items`` is ``None`` when absent or not an object."""

    items: Optional[dict[Any, Any]] = None


class PrimitiveSchema(SchemaNode):
    """``string``, ``boolean``, or a numeric type (``integer`` folds into ``number``)."""

    kind: PrimitiveKind


class AllOfSchema(SchemaNode):
    """A composite whose parts are merged before mapping."""

    parts: tuple[Any, ...] = ()


class UnknownSchema(SchemaNode):
    """Any value the classifier does not recognise, kept for diagnostics."""

    raw: Any = None


def parse_schema(schema: Any) -> SchemaNode:
    """Classify a resolved schema value into one :class:`SchemaNode` variant.

    The checks run in a fixed priority order: ``properties`` first, then
    ``type`` (object, array, primitives), then ``allOf``. Anything else --
    including non-dict values and unresolved ``$ref`` dicts left behind at
    a reference cycle -- is an :class:`UnknownSchema`.

    Args:
        schema: A schema value from the resolved document.

    Returns:
        The matching schema node.

    Example::

        >>> parse_schema({"type": "integer"})
        PrimitiveSchema(kind='number')
    """
    if not isinstance(schema, dict):
        return UnknownSchema(raw=schema)

    properties = schema.get("properties")
    if isinstance(properties, dict):
        required = schema.get("required")
        names = required if isinstance(required, list) else []
        return ObjectSchema(
            properties=properties,
            required=frozenset(n for n in names if isinstance(n, str)),
        )

    schema_type = schema.get("type")
    if schema_type == "object":
        return MapSchema()
    if schema_type == "array":
        items = schema.get("items")
        return ArraySchema(items=items if isinstance(items, dict) else None)
    if isinstance(schema_type, str) and schema_type in _PRIMITIVE_KINDS:
        return PrimitiveSchema(kind=_PRIMITIVE_KINDS[schema_type])

    all_of = schema.get("allOf")
    if isinstance(all_of, list):
        return AllOfSchema(parts=tuple(all_of))

    return UnknownSchema(raw=schema)


# ---------------------------------------------------------------------------
# Type nodes
# ---------------------------------------------------------------------------


class TypeNode(BaseModel):
    """Base class for every generated type."""

    model_config = ConfigDict(frozen=True)


class PrimitiveType(TypeNode):
    kind: PrimitiveKind


class UnknownType(TypeNode):
    """TypeScript ``unknown``."""


class ArrayType(TypeNode):
    element: TypeNode


class DictionaryType(TypeNode):
    """``Record<key, value>``."""

    key: TypeNode
    value: TypeNode


class UnionType(TypeNode):
    """``A | B | ...``; an empty union prints as ``unknown``."""

    members: tuple[TypeNode, ...] = ()


class StructField(BaseModel):
    """One property of a :class:`StructType`."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeNode
    optional: bool = False


class StructType(TypeNode):
    """An inline object type literal, fields in declaration order."""

    fields: tuple[StructField, ...] = ()


STRING = PrimitiveType(kind="string")
NUMBER = PrimitiveType(kind="number")
BOOLEAN = PrimitiveType(kind="boolean")
UNKNOWN = UnknownType()
