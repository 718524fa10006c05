"""OpenAPI document parsing -- load, resolve ``$ref`` pointers, walk operations.

Typical usage::

    from openapi_sdk.parser import load_spec, validate_openapi_version, walk_document

    raw = load_spec("openapi.yaml")
    validate_openapi_version(raw)
    operations = walk_document(raw)

Sub-modules:

* :mod:`~openapi_sdk.parser.loader` -- file, URL and stdin input, JSON/YAML
  detection, OpenAPI version check.
* :mod:`~openapi_sdk.parser.resolver` -- ``$ref`` inlining across files with
  cycle detection.
* :mod:`~openapi_sdk.parser.walker` -- one
  :class:`~openapi_sdk.models.OperationDescriptor` per path-item entry.
"""

from openapi_sdk.parser.loader import load_spec, validate_openapi_version
from openapi_sdk.parser.walker import walk_document

__all__ = ["load_spec", "validate_openapi_version", "walk_document"]
