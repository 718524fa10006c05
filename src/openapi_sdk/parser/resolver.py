"""Inline ``$ref`` pointers.

:func:`resolve_refs` returns a new document in which every ``{"$ref": ...}``
object is replaced by its target. The input is not modified.

Behaviour worth knowing about:

* Same-document references (``#/...``) are looked up in the document that
  contains them.
* References to other files (``./schemas/pet.yaml#/Pet``) are resolved
  relative to the file or URL that contains the reference, loaded with
  :func:`~openapi_sdk.parser.loader.load_spec` and cached, so each external
  document is read once per run. A document read from stdin resolves
  relative references against the working directory.
* Each target is resolved once and shared by every place that references
  it, so large component libraries are not copied per use site.
* A reference that is already being resolved further up the chain is a
  cycle, across files as well as within one. The ``$ref`` object is left
  in place at that point; downstream consumers treat it as an unknown
  schema.
* Keys next to a ``$ref`` (allowed by OpenAPI 3.1, e.g. ``description``)
  are laid over the resolved target when the target is an object.
* A pointer to a location that does not exist, or an external document
  that cannot be loaded, raises
  :class:`~openapi_sdk.exceptions.SpecParseError`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import unquote

import httpx

from openapi_sdk.exceptions import SpecParseError
from openapi_sdk.generator.headers import HeaderSource
from openapi_sdk.parser.loader import load_spec

logger = logging.getLogger(__name__)

_URL_PREFIXES = ("http://", "https://")


def resolve_refs(
    spec: dict[str, Any],
    source: Optional[str] = None,
    headers: Optional[HeaderSource] = None,
) -> dict[str, Any]:
    """Return a copy of *spec* with all ``$ref`` pointers inlined.

    Args:
        spec: The loaded root document.
        source: Where *spec* came from (file path or URL); relative
            external references are resolved against it. ``None`` or ``-``
            means the working directory.
        headers: Request headers for external documents fetched from the
            same host as *source*.

    Raises:
        SpecParseError: For dangling pointers and external documents that
            cannot be loaded.

    Example::

        raw = load_spec("petstore.yaml")
        resolved = resolve_refs(raw, source="petstore.yaml")
        # resolved["paths"]["/pets"]["get"]["responses"]["200"]["content"]
        # now holds the Pet schema itself instead of a $ref object.
    """
    return _Resolver(spec, source, headers).resolve()


def lookup_pointer(document: Any, ref: str) -> Any:
    """Follow the JSON pointer in *ref* (``#/a/b/0``) through *document*.

    Tokens are percent-decoded, then ``~1`` and ``~0`` are unescaped as
    RFC 6901 requires.

    Raises:
        SpecParseError: If *ref* is not a fragment pointer or does not lead
            anywhere.
    """
    if ref == "#":
        return document
    if not ref.startswith("#/"):
        raise SpecParseError(f"Invalid $ref pointer: {ref}")

    current = document
    for raw_token in ref[2:].split("/"):
        token = unquote(raw_token).replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and token in current:
            current = current[token]
        elif isinstance(current, list) and token.isdigit() and int(token) < len(current):
            current = current[int(token)]
        else:
            raise SpecParseError(f"Cannot resolve $ref '{ref}': '{token}' not found")
    return current


def join_location(base: str, reference: str) -> str:
    """Resolve the document part of a ``$ref`` against *base*.

    *base* is a URL, an absolute file path, or ``""`` for the working
    directory.

    Example::

        >>> join_location("https://api.example.com/v1/openapi.json", "pet.json")
        'https://api.example.com/v1/pet.json'
    """
    if reference.startswith(_URL_PREFIXES):
        return reference
    if base.startswith(_URL_PREFIXES):
        return str(httpx.URL(base).join(reference))
    directory = Path(base).parent if base else Path.cwd()
    return str((directory / unquote(reference)).resolve())


def _root_location(source: Optional[str]) -> str:
    if not source or source == "-":
        return ""
    if source.startswith(_URL_PREFIXES):
        return source
    return str(Path(source).resolve())


class _Resolver:
    """One resolution pass over a root document and whatever it references."""

    def __init__(
        self,
        document: dict[str, Any],
        source: Optional[str],
        headers: Optional[HeaderSource],
    ):
        self._root = _root_location(source)
        self._documents: dict[str, Any] = {self._root: document}
        self._headers = headers
        self._resolved: dict[str, Any] = {}
        self._cycle_breaks = 0

    def resolve(self) -> dict[str, Any]:
        return self._walk(self._documents[self._root], self._root, ())

    def _walk(self, node: Any, location: str, chain: tuple[str, ...]) -> Any:
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str):
                return self._follow(node, ref, location, chain)
            return {key: self._walk(value, location, chain) for key, value in node.items()}
        if isinstance(node, list):
            return [self._walk(item, location, chain) for item in node]
        return node

    def _follow(
        self, node: dict[str, Any], ref: str, location: str, chain: tuple[str, ...]
    ) -> Any:
        document_part, _, fragment = ref.partition("#")
        target_location = join_location(location, document_part) if document_part else location
        key = f"{target_location}#{fragment}"

        if key in chain:
            logger.debug("Circular $ref %s left unresolved", ref)
            self._cycle_breaks += 1
            return dict(node)

        target = self._target(key, ref, target_location, f"#{fragment}", chain)

        siblings = {key: value for key, value in node.items() if key != "$ref"}
        if siblings and isinstance(target, dict):
            merged = dict(target)
            merged.update(self._walk(siblings, location, chain))
            return merged
        return target

    def _target(
        self,
        key: str,
        ref: str,
        location: str,
        pointer: str,
        chain: tuple[str, ...],
    ) -> Any:
        if key in self._resolved:
            return self._resolved[key]

        document = self._document(location, ref)
        breaks_before = self._cycle_breaks
        target = self._walk(lookup_pointer(document, pointer), location, chain + (key,))
        # A result that contains a cycle break depends on the chain it was
        # reached through, so only chain-independent results are shared.
        if self._cycle_breaks == breaks_before:
            self._resolved[key] = target
        return target

    def _document(self, location: str, ref: str) -> Any:
        if location in self._documents:
            return self._documents[location]

        logger.debug("Loading external document %s for $ref %s", location, ref)
        try:
            document = load_spec(location, headers=self._headers_for(location))
        except SpecParseError as exc:
            raise SpecParseError(f"Cannot load $ref '{ref}': {exc}") from exc
        self._documents[location] = document
        return document

    def _headers_for(self, location: str) -> Optional[HeaderSource]:
        if not self._headers or not self._root.startswith(_URL_PREFIXES):
            return None
        if not location.startswith(_URL_PREFIXES):
            return None
        if httpx.URL(location).host != httpx.URL(self._root).host:
            return None
        return self._headers
