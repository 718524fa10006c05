"""End-to-end generation: raw document in, TypeScript source out.

:func:`generate_sdk` runs every step in memory -- version check, ``$ref``
resolution, walk, synthesis, rendering -- and returns the finished source
along with the units and diagnostics. Nothing is written here, so a fatal
error at any step leaves the output location untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from openapi_sdk.generator.diagnostics import Diagnostics
from openapi_sdk.generator.emitter import render_sdk
from openapi_sdk.generator.headers import DEFAULT_HELPER_NAME, HeaderSource, validate_helper_name
from openapi_sdk.generator.operation import (
    BaseUrlSpec,
    CallableUnit,
    NoBaseUrl,
    synthesize_operations,
)
from openapi_sdk.parser.loader import validate_openapi_version
from openapi_sdk.parser.walker import walk_document

logger = logging.getLogger(__name__)


@dataclass
class GeneratedSdk:
    """Result of one generation run."""

    source: str
    openapi_version: str
    units: list[CallableUnit] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def generate_sdk(
    raw_spec: dict[str, Any],
    base_url: BaseUrlSpec = NoBaseUrl(),
    helper_name: str = DEFAULT_HELPER_NAME,
    source: Optional[str] = None,
    fetch_headers: Optional[HeaderSource] = None,
) -> GeneratedSdk:
    """Generate the TypeScript SDK for *raw_spec*.

    Args:
        raw_spec: The loaded document (``$ref`` pointers unresolved).
        base_url: Parsed ``--base-url``, see
            :func:`~openapi_sdk.generator.operation.parse_base_url`.
        helper_name: Name of the emitted header merge helper.
        source: Location *raw_spec* was loaded from, for external ``$ref``
            targets.
        fetch_headers: Headers for external documents on the same host.

    Raises:
        InvalidUsageError: If *helper_name* is not a valid identifier.
        SpecParseError: If the document is not OpenAPI 3.x, has no ``paths``,
            contains a malformed operation, or two operations map to the
            same function name.
    """
    validate_helper_name(helper_name)
    version = validate_openapi_version(raw_spec)

    operations = walk_document(raw_spec, source, fetch_headers)
    diagnostics = Diagnostics()
    units = synthesize_operations(operations, base_url, diagnostics, helper_name)
    logger.debug(
        "Synthesized %d operation(s) with %d diagnostic(s)", len(units), len(diagnostics)
    )

    return GeneratedSdk(
        source=render_sdk(units, helper_name),
        openapi_version=version,
        units=units,
        diagnostics=diagnostics,
    )
