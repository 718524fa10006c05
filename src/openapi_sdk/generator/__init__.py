"""TypeScript SDK generation -- map schemas, synthesize operations, render source.

Typical usage::

    from openapi_sdk.generator import parse_base_url, render_sdk, synthesize_operations

    units = synthesize_operations(operations, parse_base_url("process.env.API_URL"))
    source = render_sdk(units)

Sub-modules:

* :mod:`~openapi_sdk.generator.nodes` -- schema and type node variants.
* :mod:`~openapi_sdk.generator.type_mapper` -- JSON Schema to type tree.
* :mod:`~openapi_sdk.generator.path_template` -- ``{param}`` path parsing.
* :mod:`~openapi_sdk.generator.operation` -- base URL handling and
  :class:`~openapi_sdk.generator.operation.CallableUnit` synthesis.
* :mod:`~openapi_sdk.generator.headers` -- header merge helper.
* :mod:`~openapi_sdk.generator.emitter` -- TypeScript printing.
"""

from openapi_sdk.generator.diagnostics import Diagnostic, Diagnostics
from openapi_sdk.generator.emitter import print_type, render_sdk
from openapi_sdk.generator.operation import (
    CallableUnit,
    parse_base_url,
    synthesize_operation,
    synthesize_operations,
)
from openapi_sdk.generator.type_mapper import map_schema

__all__ = [
    "CallableUnit",
    "Diagnostic",
    "Diagnostics",
    "map_schema",
    "parse_base_url",
    "print_type",
    "render_sdk",
    "synthesize_operation",
    "synthesize_operations",
]
