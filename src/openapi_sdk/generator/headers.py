"""Header merging, in Python and as an emitted TypeScript helper.

Every generated file carries one exported helper (``combineHeaders`` by
default) that overlays caller-supplied headers on an operation's defaults::

    combineHeaders(defaultHeaders: HeadersInit, headers?: HeadersInit): Headers

:func:`combine_headers` is the same algorithm for ``httpx``. The spec
loader uses it to layer ``--header`` values over its default ``Accept``
header when fetching a remote document, and the tests use it to pin down
the helper's semantics:

* the result starts as a copy of the defaults;
* each override entry *replaces* the same-named header, case-insensitively;
* overrides may be a header collection, a list of ``(name, value)`` pairs,
  or a mapping;
* ``None`` overrides return the defaults unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Optional, Union

import httpx

from openapi_sdk.exceptions import InvalidUsageError
from openapi_sdk.generator.naming import RESERVED_WORDS, is_identifier
from openapi_sdk.generator.templating import render_template


DEFAULT_HELPER_NAME = "combineHeaders"

HeaderSource = Union[httpx.Headers, Mapping[str, str], Iterable[tuple[str, str]]]


def combine_headers(
    defaults: HeaderSource,
    overrides: Optional[HeaderSource] = None,
) -> httpx.Headers:
    """Overlay *overrides* on *defaults* and return a new header collection.

    Args:
        defaults: Base headers.
        overrides: Headers that replace same-named defaults. May be omitted.

    Returns:
        A fresh :class:`httpx.Headers`; neither input is modified.

    Example::

        >>> merged = combine_headers({"Content-Type": "application/json"},
        ...                          [("content-type", "text/plain"), ("X-Id", "7")])
        >>> merged["Content-Type"], merged["x-id"]
        ('text/plain', '7')
    """
    combined = httpx.Headers(defaults)
    if overrides is None:
        return combined

    if isinstance(overrides, httpx.Headers):
        entries: Iterable[tuple[str, str]] = overrides.items()
    elif isinstance(overrides, Mapping):
        entries = overrides.items()
    else:
        entries = overrides

    for key, value in entries:
        combined[key] = value
    return combined


def parse_header_args(values: Iterable[str]) -> list[tuple[str, str]]:
    """Parse repeated ``--header "Name: value"`` options.

    Raises:
        InvalidUsageError: If an entry has no ``:`` or an empty name.
    """
    pairs: list[tuple[str, str]] = []
    for raw in values:
        name, sep, value = raw.partition(":")
        name = name.strip()
        if not sep or not name:
            raise InvalidUsageError(
                f"Invalid header '{raw}'. Expected the form 'Name: value'."
            )
        pairs.append((name, value.strip()))
    return pairs


def validate_helper_name(name: str) -> str:
    """Return *name* if it can be used as the helper's function name.

    Raises:
        InvalidUsageError: If *name* is not an identifier or is reserved.
    """
    if not is_identifier(name) or name in RESERVED_WORDS:
        raise InvalidUsageError(
            f"Invalid helper name '{name}'. It must be a TypeScript identifier."
        )
    return name


def render_combine_headers(name: str = DEFAULT_HELPER_NAME) -> str:
    """Render the TypeScript header merge helper declared as *name*."""
    return render_template("combine_headers.ts.j2", name=validate_helper_name(name))
