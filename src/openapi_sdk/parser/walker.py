"""Walk a document's ``paths`` and produce one descriptor per operation.

Every key of every path item is treated as an operation entry, in the
order the document declares them. An entry must be an object carrying an
``operationId``; anything else aborts the whole run, so a broken document
never yields a partial SDK.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from openapi_sdk.exceptions import MalformedOperationError, SpecParseError
from openapi_sdk.generator.headers import HeaderSource
from openapi_sdk.models import OperationDescriptor, ResponseDescriptor
from openapi_sdk.parser.resolver import resolve_refs

logger = logging.getLogger(__name__)


def walk_document(
    raw_spec: dict[str, Any],
    source: Optional[str] = None,
    headers: Optional[HeaderSource] = None,
) -> list[OperationDescriptor]:
    """Resolve ``$ref`` pointers in *raw_spec* and list its operations.

    Args:
        raw_spec: The document as returned by
            :func:`~openapi_sdk.parser.loader.load_spec`.
        source: Where *raw_spec* was loaded from; external ``$ref``
            targets are resolved relative to it.
        headers: Request headers for external documents on the same host.

    Returns:
        Descriptors in document order: paths as declared, and entries within
        each path item as declared.

    Raises:
        SpecParseError: If ``paths`` is missing, or a path item is not an
            object.
        MalformedOperationError: If an entry is an array, a string, some
            other non-object value, or an object without ``operationId``.
    """
    spec = resolve_refs(raw_spec, source, headers)

    paths = spec.get("paths")
    if paths is None:
        raise SpecParseError("No paths found in the document")
    if not isinstance(paths, dict):
        raise SpecParseError(f"'paths' must be an object (got {type(paths).__name__})")

    operations: list[OperationDescriptor] = []
    for path, path_item in paths.items():
        path = str(path)
        if not isinstance(path_item, dict):
            raise SpecParseError(f"Path item for '{path}' must be an object")

        for method, operation in path_item.items():
            method = str(method)
            descriptor = _build_descriptor(path, method, operation)
            logger.debug("Found %s %s (%s)", descriptor.method, path, descriptor.operation_id)
            operations.append(descriptor)

    if not operations:
        logger.debug("Document declares no operations")
    return operations


def _build_descriptor(path: str, method: str, operation: Any) -> OperationDescriptor:
    if isinstance(operation, list):
        raise MalformedOperationError("Operation is an array", path=path, method=method)
    if isinstance(operation, str):
        raise MalformedOperationError("Operation is a string", path=path, method=method)
    if not isinstance(operation, dict):
        raise MalformedOperationError("Operation is not an object", path=path, method=method)

    operation_id = operation.get("operationId")
    if operation_id is None:
        raise MalformedOperationError("No operationId", path=path, method=method)
    if not isinstance(operation_id, str) or not operation_id:
        raise MalformedOperationError(
            "operationId must be a non-empty string", path=path, method=method
        )

    return OperationDescriptor(
        operation_id=operation_id,
        path=path,
        method=method.upper(),
        summary=_text(operation.get("summary")),
        description=_text(operation.get("description")),
        responses=_extract_responses(operation.get("responses")),
    )


def _text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _extract_responses(responses: Any) -> list[ResponseDescriptor]:
    if not isinstance(responses, dict):
        return []

    result: list[ResponseDescriptor] = []
    for status_code, response in responses.items():
        if not isinstance(response, dict):
            continue
        content = response.get("content")
        media_types: dict[str, Any] = {}
        if isinstance(content, dict):
            for media_type, media in content.items():
                media_types[str(media_type)] = (
                    media.get("schema") if isinstance(media, dict) else None
                )
        result.append(
            ResponseDescriptor(
                status_code=str(status_code),
                description=_text(response.get("description")),
                media_types=media_types,
            )
        )
    return result
