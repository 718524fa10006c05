"""Canonical Pydantic models shared across all openapi-sdk modules.

The models fall into two groups:

**Configuration models** -- resolved from CLI flags, environment variables
and the project-local ``openapi-sdk.json``:
    :class:`GenerateConfig`.

**Document walker output models** -- produced by
:func:`~openapi_sdk.parser.walker.walk_document` and consumed by the
operation synthesizer:
    :class:`HTTPMethod`, :class:`ResponseDescriptor` and
    :class:`OperationDescriptor`.

Walker output models are frozen: a descriptor is built once per
(path, method) entry and is never mutated afterwards.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


JSON_MEDIA_TYPE = "application/json"
"""The only media type whose schema contributes to generated return types."""


# --- Generate Config ---


class GenerateConfig(BaseModel):
    """Effective settings for one ``openapi-sdk generate`` run.

    Built by :func:`~openapi_sdk.config.resolve_config` from the precedence
    chain (CLI flags, environment, project file, defaults). The project file
    may carry keys the CLI does not know about; they are ignored.

    Example::

        GenerateConfig(
            input="openapi.yaml",
            output="src/api.ts",
            base_url="import.meta.env.VITE_API_URL",
        )
    """

    model_config = ConfigDict(extra="ignore")

    input: Optional[str] = Field(
        default=None, description="Spec file path, URL, or '-' for stdin"
    )
    output: Optional[str] = Field(
        default=None, description="Output .ts file path, or '-' for stdout"
    )
    base_url: Optional[str] = Field(
        default=None,
        description="Absolute URL, or a dotted reference such as process.env.API_URL",
    )
    helper_name: str = Field(
        default="combineHeaders",
        description="Name of the emitted header merge helper",
    )
    headers: list[str] = Field(
        default_factory=list,
        description="'Name: value' headers sent when fetching a remote spec",
    )


# --- Document Walker Output Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods recognised by OpenAPI 3.x path-item objects.

    The walker keeps every path-item key as an upper-case method string, so
    this enum is used for classification rather than validation.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"


BODIED_METHODS = frozenset({HTTPMethod.POST.value, HTTPMethod.PUT.value, HTTPMethod.PATCH.value})
"""Methods whose generated requests default to a JSON ``Content-Type``."""


class ResponseDescriptor(BaseModel):
    """One entry of an operation's ``responses`` map.

    ``media_types`` maps each declared content type to its (resolved) schema,
    or ``None`` when the media type object carries no schema.
    """

    model_config = ConfigDict(frozen=True)

    status_code: str
    description: Optional[str] = None
    media_types: dict[str, Any] = Field(default_factory=dict)

    @property
    def json_schema(self) -> Any:
        """The ``application/json`` schema, or ``None`` when there is none."""
        return self.media_types.get(JSON_MEDIA_TYPE)

    @property
    def has_json_body(self) -> bool:
        """Whether this response declares an ``application/json`` schema object."""
        return isinstance(self.json_schema, dict)


class OperationDescriptor(BaseModel):
    """A single validated API operation (one URL path + HTTP method pair).

    Each descriptor corresponds to exactly one generated TypeScript function.
    ``responses`` preserves the document's declaration order, which in turn
    fixes the order of the members in the generated return-type union.
    """

    model_config = ConfigDict(frozen=True)

    operation_id: str
    path: str
    method: str
    summary: Optional[str] = None
    description: Optional[str] = None
    responses: list[ResponseDescriptor] = Field(default_factory=list)

    @property
    def json_responses(self) -> list[ResponseDescriptor]:
        """Responses that declare an ``application/json`` schema, in order."""
        return [r for r in self.responses if r.has_json_body]
