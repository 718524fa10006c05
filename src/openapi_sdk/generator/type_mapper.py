"""Translate resolved JSON Schema values into :mod:`~openapi_sdk.generator.nodes` type trees.

Mapping rules, checked in this order for every schema node:

=====================================  ==========================================
Schema                                 Type
=====================================  ==========================================
has ``properties``                     ``StructType``; a field is optional unless
                                       its name is listed in ``required``
``type: object``                       ``Record<string | number, unknown>``
``type: array``                        ``ArrayType`` of the mapped ``items``,
                                       or of ``unknown`` without ``items``
``integer`` / ``number``               ``number``
``string`` / ``boolean``               ``string`` / ``boolean``
``allOf``                              the parts' keys merged into one schema
                                       (later parts win), then mapped again
anything else                          ``unknown`` plus a diagnostic
=====================================  ==========================================

``oneOf``, ``anyOf``, ``enum``, ``nullable`` and ``additionalProperties`` are
not interpreted. Mapping never raises; everything it cannot translate becomes
``unknown`` and is recorded on the :class:`~openapi_sdk.generator.diagnostics.Diagnostics`
collector returned alongside the type.
"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Optional

from openapi_sdk.generator.diagnostics import Diagnostics, pointer_segment
from openapi_sdk.generator.nodes import (
    AllOfSchema,
    ArraySchema,
    ArrayType,
    DictionaryType,
    MapSchema,
    NUMBER,
    ObjectSchema,
    PrimitiveSchema,
    PrimitiveType,
    STRING,
    StructField,
    StructType,
    TypeNode,
    UNKNOWN,
    UnionType,
    parse_schema,
)

logger = logging.getLogger(__name__)

RECORD_KEY = UnionType(members=(STRING, NUMBER))
"""Key type used for free-form ``type: object`` maps."""


class MappedType(NamedTuple):
    """Result of :func:`map_schema`: the type tree and the run's findings."""

    type: TypeNode
    diagnostics: Diagnostics


def map_schema(
    schema: Any,
    diagnostics: Optional[Diagnostics] = None,
    location: str = "#",
) -> MappedType:
    """Map one schema to a type tree.

    Args:
        schema: A resolved schema value (usually a dict).
        diagnostics: Collector to append findings to. A fresh one is created
            when omitted.
        location: JSON-pointer-like location of *schema*, used in diagnostics.

    Returns:
        A :class:`MappedType`; it unpacks as ``(type, diagnostics)``.

    Example::

        >>> node, found = map_schema({"type": "array", "items": {"type": "string"}})
        >>> node
        ArrayType(element=PrimitiveType(kind='string'))
        >>> len(found)
        0
    """
    if diagnostics is None:
        diagnostics = Diagnostics()
    return MappedType(_map(schema, diagnostics, location), diagnostics)


def merge_all_of(parts: tuple[Any, ...]) -> dict[str, Any]:
    """Shallow-merge the top-level keys of every ``allOf`` part.

    Keys from later parts overwrite earlier ones; nested ``properties`` are
    *not* combined. Parts that are not objects contribute nothing.
    """
    merged: dict[str, Any] = {}
    for part in parts:
        if isinstance(part, dict):
            merged.update(part)
    return merged


def _map(schema: Any, diagnostics: Diagnostics, location: str) -> TypeNode:
    node = parse_schema(schema)

    if isinstance(node, ObjectSchema):
        fields = []
        for key, prop in node.properties.items():
            name = str(key)
            prop_location = f"{location}/properties/{pointer_segment(name)}"
            fields.append(
                StructField(
                    name=name,
                    type=_map(prop, diagnostics, prop_location),
                    optional=name not in node.required,
                )
            )
        return StructType(fields=tuple(fields))

    if isinstance(node, MapSchema):
        return DictionaryType(key=RECORD_KEY, value=UNKNOWN)

    if isinstance(node, ArraySchema):
        if node.items is None:
            return ArrayType(element=UNKNOWN)
        return ArrayType(element=_map(node.items, diagnostics, f"{location}/items"))

    if isinstance(node, PrimitiveSchema):
        return PrimitiveType(kind=node.kind)

    if isinstance(node, AllOfSchema):
        return _map(merge_all_of(node.parts), diagnostics, location)

    logger.debug("Unrecognised schema at %s: %r", location, schema)
    diagnostics.add(
        "Unrecognised schema; generated as unknown",
        location=location,
        schema=schema,
    )
    return UNKNOWN
