"""Read an OpenAPI document from a file, an HTTP(S) URL, or stdin.

JSON and YAML are both accepted. The format is guessed from the file
extension or the response ``Content-Type``; without a hint JSON is tried
first and YAML second, since every JSON document is also YAML but the JSON
parser gives better error messages.

Remote documents are fetched with :mod:`httpx`. Extra request headers (for
instance an ``Authorization`` header for a private spec) are layered over
the loader's own ``Accept`` header with
:func:`~openapi_sdk.generator.headers.combine_headers`.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import httpx
import yaml

from openapi_sdk.exceptions import SpecParseError
from openapi_sdk.generator.headers import HeaderSource, combine_headers

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30.0

DEFAULT_FETCH_HEADERS = {
    "Accept": "application/json, application/yaml;q=0.9, */*;q=0.8",
}


def load_spec(source: str, headers: Optional[HeaderSource] = None) -> dict[str, Any]:
    """Load and parse the document at *source*.

    Args:
        source: ``-`` for stdin, an ``http://`` or ``https://`` URL, or a
            file path.
        headers: Extra request headers for URL sources; ignored otherwise.

    Returns:
        The document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be read or does not contain a
            JSON/YAML object.
    """
    if source == "-":
        content, hint = _read_stdin()
    elif source.startswith(("http://", "https://")):
        content, hint = _fetch_url(source, headers)
    else:
        content, hint = _read_file(source)
    return _parse_content(content, hint=hint)


def _read_stdin() -> tuple[str, str]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc
    if not content.strip():
        raise SpecParseError("No input received from stdin")
    return content, ""


def _fetch_url(url: str, headers: Optional[HeaderSource]) -> tuple[str, str]:
    request_headers = combine_headers(DEFAULT_FETCH_HEADERS, headers)
    logger.debug("Fetching %s", url)
    try:
        response = httpx.get(
            url,
            headers=request_headers,
            timeout=FETCH_TIMEOUT,
            follow_redirects=True,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    else:
        hint = ""
    return response.text, hint


def _read_file(path: str) -> tuple[str, str]:
    file_path = Path(path)
    if not file_path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc
    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return content, "json"
    if suffix in (".yaml", ".yml"):
        return content, "yaml"
    return content, ""


def _ensure_mapping(document: Any) -> dict[str, Any]:
    if not isinstance(document, dict):
        kind = "empty document" if document is None else type(document).__name__
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
    return document


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* according to *hint* (``"json"``, ``"yaml"`` or ``""``).

    A ``json`` hint is strict: YAML is not attempted when the JSON parser
    fails. Without a hint both parsers are tried and both errors reported.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _ensure_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _ensure_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise SpecParseError(
        "Failed to parse spec as JSON or YAML" + "".join(f"\n  {e}" for e in errors)
    )


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Return the document's ``openapi`` version, rejecting anything but 3.x.

    Raises:
        SpecParseError: For Swagger 2.x documents, a missing ``openapi``
            field, or a major version other than 3.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Convert the document to OpenAPI 3.x first "
            "(for example with https://converter.swagger.io)."
        )

    version = spec.get("openapi")
    if version is None:
        raise SpecParseError("Missing 'openapi' field. Is this an OpenAPI 3.x document?")

    version_str = str(version)
    if not version_str.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {version_str}. Only OpenAPI 3.x is supported."
        )
    return version_str
