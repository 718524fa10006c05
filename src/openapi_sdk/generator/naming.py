"""TypeScript identifier rules for generated names.

OpenAPI documents are free to use any string as an ``operationId``, a
property name or a path parameter. The generated file must still parse, so
every name that reaches the emitter goes through one of the helpers here:

* :func:`to_function_name` turns an ``operationId`` into a function name.
  Valid identifiers pass through untouched; anything else is camel-cased
  and reserved or already-bound names get an ``Op`` suffix.
* :func:`property_key` quotes property names that are not identifiers.
* :func:`member_access` picks ``obj.name`` or ``obj["name"]``.
"""

from __future__ import annotations

import json
import re


_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Runs of characters that cannot appear in an identifier.
_WORD_BREAK_RE = re.compile(r"[^A-Za-z0-9_$]+")

RESERVED_WORDS: frozenset[str] = frozenset(
    {
        "arguments", "await", "break", "case", "catch", "class", "const", "continue",
        "debugger", "default", "delete", "do", "else", "enum", "eval", "export",
        "extends", "false", "finally", "for", "function", "if",
        "implements", "import", "in", "instanceof", "interface", "let",
        "new", "null", "package", "private", "protected", "public",
        "return", "static", "super", "switch", "this", "throw", "true",
        "try", "typeof", "var", "void", "while", "with", "yield",
    }
)
"""ECMAScript reserved words, including strict-mode and TypeScript ones.

``eval`` and ``arguments`` are listed too: module code is strict, where
neither may name a declaration.
"""


def is_identifier(name: str) -> bool:
    """Return ``True`` if *name* is a syntactically valid (ASCII) identifier."""
    return bool(_IDENTIFIER_RE.match(name))


def to_function_name(operation_id: str, taken: frozenset[str] = frozenset()) -> str:
    """Derive a callable name from an ``operationId``.

    Transformation steps:

    1. A valid identifier that is neither reserved nor in *taken* is
       returned unchanged.
    2. Otherwise split on characters that are not allowed in identifiers and
       join the words in camelCase (``"list-pets"`` -> ``"listPets"``).
    3. A leading digit gets an underscore prefix.
    4. Reserved words and names in *taken* get an ``Op`` suffix
       (``"delete"`` -> ``"deleteOp"``).
    5. An ``operationId`` with no usable characters becomes ``"operation"``.

    *taken* holds module-level names the generated file already binds or
    reads, such as ``fetch`` and the header merge helper.

    Example::

        >>> to_function_name("getPetById")
        'getPetById'
        >>> to_function_name("pets.list-all")
        'petsListAll'
        >>> to_function_name("delete")
        'deleteOp'
        >>> to_function_name("fetch", frozenset({"fetch"}))
        'fetchOp'
    """
    if (
        is_identifier(operation_id)
        and operation_id not in RESERVED_WORDS
        and operation_id not in taken
    ):
        return operation_id

    words = [w for w in _WORD_BREAK_RE.split(operation_id) if w]
    if not words:
        return "operation"

    head, rest = words[0], words[1:]
    result = head[:1].lower() + head[1:] + "".join(w[:1].upper() + w[1:] for w in rest)

    if result[0].isdigit():
        result = f"_{result}"
    if result in RESERVED_WORDS or result in taken:
        result = f"{result}Op"
    return result


def string_literal(value: str) -> str:
    """Render *value* as a double-quoted string literal."""
    return json.dumps(value, ensure_ascii=False)


def property_key(name: str) -> str:
    """Render a property name for a type literal, quoting it when needed."""
    return name if is_identifier(name) else string_literal(name)


def member_access(target: str, name: str) -> str:
    """Render ``target.name``, or ``target["name"]`` for non-identifiers."""
    if is_identifier(name):
        return f"{target}.{name}"
    return f"{target}[{string_literal(name)}]"
