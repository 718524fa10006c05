"""Turn walked operations into callable units ready for emission.

A :class:`CallableUnit` carries everything the emitter needs for one
generated function: the sanitised name, HTTP method, parsed path template,
base URL, return type and default headers. Units are immutable and are
never read back once rendered.

The base URL is decided once per run by :func:`parse_base_url`:

* nothing -> ``undefined`` (the template must then be an absolute URL at
  runtime);
* an absolute URL (scheme and host) -> a string literal;
* anything else -> a dotted reference such as ``import.meta.env.API_URL``,
  emitted as a chain of member accesses.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict

from openapi_sdk.exceptions import InvalidUsageError, SpecParseError
from openapi_sdk.generator.diagnostics import Diagnostics, pointer_segment
from openapi_sdk.generator.headers import DEFAULT_HELPER_NAME
from openapi_sdk.generator.naming import is_identifier, to_function_name
from openapi_sdk.generator.nodes import TypeNode, UNKNOWN, UnionType
from openapi_sdk.generator.path_template import PathTemplate, build_path_template
from openapi_sdk.generator.type_mapper import map_schema
from openapi_sdk.models import BODIED_METHODS, JSON_MEDIA_TYPE, OperationDescriptor

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Base URL
# ---------------------------------------------------------------------------


class LiteralBaseUrl(BaseModel):
    """An absolute URL baked into the generated code."""

    model_config = ConfigDict(frozen=True)

    url: str


class ReferenceBaseUrl(BaseModel):
    """A dotted runtime reference, one member access per part."""

    model_config = ConfigDict(frozen=True)

    parts: tuple[str, ...]


class NoBaseUrl(BaseModel):
    """No base URL; the generated code passes ``undefined``."""

    model_config = ConfigDict(frozen=True)


BaseUrlSpec = Union[LiteralBaseUrl, ReferenceBaseUrl, NoBaseUrl]


def _is_absolute_url(value: str) -> bool:
    try:
        return httpx.URL(value).is_absolute_url
    except httpx.InvalidURL:
        return False


def parse_base_url(value: Optional[str]) -> BaseUrlSpec:
    """Classify the ``--base-url`` value.

    Raises:
        InvalidUsageError: If *value* looks like a URL (contains ``://``) but
            is not absolute, or if a dotted reference has a part that is not
            an identifier.

    Example::

        >>> parse_base_url("https://api.example.com/v1")
        LiteralBaseUrl(url='https://api.example.com/v1')
        >>> parse_base_url("process.env.API_URL")
        ReferenceBaseUrl(parts=('process', 'env', 'API_URL'))
    """
    if not value:
        return NoBaseUrl()

    if _is_absolute_url(value):
        return LiteralBaseUrl(url=value)

    if "://" in value:
        raise InvalidUsageError(
            f"Invalid base URL '{value}'. Expected an absolute URL such as "
            "'https://api.example.com'."
        )

    parts = tuple(value.split("."))
    bad = [part for part in parts if not is_identifier(part)]
    if bad:
        raise InvalidUsageError(
            f"Invalid base URL reference '{value}'. Expected an absolute URL or a "
            f"dotted reference such as 'process.env.API_URL' (bad part: '{bad[0]}')."
        )
    return ReferenceBaseUrl(parts=parts)


# ---------------------------------------------------------------------------
# Callable units
# ---------------------------------------------------------------------------


class CallableUnit(BaseModel):
    """Everything needed to emit one exported function."""

    model_config = ConfigDict(frozen=True)

    name: str
    operation_id: str
    method: str
    template: PathTemplate
    base_url: BaseUrlSpec = NoBaseUrl()
    return_type: TypeNode = UNKNOWN
    default_headers: tuple[tuple[str, str], ...] = ()
    summary: Optional[str] = None
    description: Optional[str] = None

    @property
    def path_params(self) -> tuple[str, ...]:
        """Distinct path parameter names, in first-occurrence order."""
        return self.template.unique_param_names

    @property
    def doc_lines(self) -> list[str]:
        """Documentation tags, ``@summary`` before ``@description``."""
        lines = []
        if self.summary:
            lines.append(f"@summary {self.summary}")
        if self.description:
            lines.append(f"@description {self.description}")
        return lines


def default_headers_for(method: str) -> tuple[tuple[str, str], ...]:
    """Default request headers for *method*.

    Bodied methods (POST, PUT, PATCH) also declare a JSON ``Content-Type``.
    """
    headers = [("Accept", JSON_MEDIA_TYPE)]
    if method.upper() in BODIED_METHODS:
        headers.append(("Content-Type", JSON_MEDIA_TYPE))
    return tuple(headers)


def response_type(operation: OperationDescriptor, diagnostics: Diagnostics) -> TypeNode:
    """Union of the mapped ``application/json`` response schemas.

    Members keep response declaration order; identical members appear once.
    An operation without JSON responses yields ``unknown``.
    """
    members: list[TypeNode] = []
    for response in operation.json_responses:
        location = "/".join(
            [
                "#/paths",
                pointer_segment(operation.path),
                operation.method.lower(),
                "responses",
                pointer_segment(response.status_code),
                "content",
                pointer_segment(JSON_MEDIA_TYPE),
                "schema",
            ]
        )
        mapped, _ = map_schema(response.json_schema, diagnostics, location)
        if mapped not in members:
            members.append(mapped)

    if not members:
        return UNKNOWN
    if len(members) == 1:
        return members[0]
    return UnionType(members=tuple(members))


MODULE_GLOBALS: frozenset[str] = frozenset(
    {"fetch", "URL", "Headers", "Object", "Array", "undefined", "TypedResponse"}
)
"""Globals the generated module reads, plus its own ``TypedResponse`` alias."""


def module_bindings(
    helper_name: str = DEFAULT_HELPER_NAME,
    base_url: BaseUrlSpec = NoBaseUrl(),
) -> frozenset[str]:
    """Names an operation function must not take in the generated module.

    A function called ``fetch`` would shadow the global its own body calls,
    and one named after the header helper would be a second declaration.
    The root of a dotted base URL reference is read by every function too.
    """
    names = set(MODULE_GLOBALS)
    names.add(helper_name)
    if isinstance(base_url, ReferenceBaseUrl):
        names.add(base_url.parts[0])
    return frozenset(names)


def synthesize_operation(
    operation: OperationDescriptor,
    base_url: BaseUrlSpec,
    diagnostics: Optional[Diagnostics] = None,
    taken: frozenset[str] = frozenset(),
) -> CallableUnit:
    """Build the :class:`CallableUnit` for one operation.

    Names in *taken* are treated like reserved words, see
    :func:`~openapi_sdk.generator.naming.to_function_name`.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    name = to_function_name(operation.operation_id, taken)
    if name != operation.operation_id:
        logger.debug("Renamed operation '%s' to '%s'", operation.operation_id, name)

    return CallableUnit(
        name=name,
        operation_id=operation.operation_id,
        method=operation.method.upper(),
        template=build_path_template(operation.path),
        base_url=base_url,
        return_type=response_type(operation, diagnostics),
        default_headers=default_headers_for(operation.method),
        summary=operation.summary,
        description=operation.description,
    )


def synthesize_operations(
    operations: list[OperationDescriptor],
    base_url: BaseUrlSpec,
    diagnostics: Optional[Diagnostics] = None,
    helper_name: str = DEFAULT_HELPER_NAME,
) -> list[CallableUnit]:
    """Synthesize every operation, preserving order.

    Function names never collide with :func:`module_bindings` for
    *helper_name* and *base_url*; such operations get an ``Op`` suffix.

    Raises:
        SpecParseError: If two operations end up with the same function name.
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    taken = module_bindings(helper_name, base_url)
    units: list[CallableUnit] = []
    seen: dict[str, str] = {}
    for operation in operations:
        unit = synthesize_operation(operation, base_url, diagnostics, taken)
        if unit.name in seen:
            raise SpecParseError(
                f"Duplicate function name '{unit.name}' generated for operationIds "
                f"'{seen[unit.name]}' and '{operation.operation_id}'"
            )
        seen[unit.name] = operation.operation_id
        units.append(unit)
    return units
