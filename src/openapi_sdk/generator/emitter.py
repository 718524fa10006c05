"""Render callable units as one TypeScript source file.

The file layout is fixed:

1. the ``TypedResponse<T>`` alias (not exported);
2. the exported header merge helper;
3. one exported function per operation, in document order, each preceded
   by a JSDoc block when the operation has a summary or description.

Type trees are printed by :func:`print_type`. Function declarations come
from the ``operation.ts.j2`` template; every value passed to it is already
valid TypeScript, so the template only arranges text.
"""

from __future__ import annotations

from openapi_sdk.generator.headers import DEFAULT_HELPER_NAME, render_combine_headers
from openapi_sdk.generator.naming import member_access, property_key, string_literal
from openapi_sdk.generator.nodes import (
    ArrayType,
    DictionaryType,
    PrimitiveType,
    StructType,
    TypeNode,
    UnionType,
    UnknownType,
)
from openapi_sdk.generator.operation import (
    BaseUrlSpec,
    CallableUnit,
    LiteralBaseUrl,
    ReferenceBaseUrl,
)
from openapi_sdk.generator.path_template import PathTemplate
from openapi_sdk.generator.templating import render_template

INDENT = "    "


# ---------------------------------------------------------------------------
# Type printing
# ---------------------------------------------------------------------------


def print_type(node: TypeNode, level: int = 0) -> str:
    """Print a type tree as TypeScript.

    *level* is the indentation depth of the line the type starts on; struct
    fields are indented one level deeper and the closing brace lines up
    with *level*.

    Example::

        >>> print(print_type(StructType(fields=(StructField(name="id", type=NUMBER),))))
        {
            id: number;
        }
    """
    if isinstance(node, PrimitiveType):
        return node.kind
    if isinstance(node, UnknownType):
        return "unknown"
    if isinstance(node, UnionType):
        if not node.members:
            return "unknown"
        return " | ".join(print_type(member, level) for member in node.members)
    if isinstance(node, ArrayType):
        element = print_type(node.element, level)
        if isinstance(node.element, UnionType) and len(node.element.members) > 1:
            element = f"({element})"
        return f"{element}[]"
    if isinstance(node, DictionaryType):
        return f"Record<{print_type(node.key, level)}, {print_type(node.value, level)}>"
    if isinstance(node, StructType):
        if not node.fields:
            return "{}"
        pad = INDENT * level
        lines = ["{"]
        for field in node.fields:
            marker = "?" if field.optional else ""
            lines.append(
                f"{pad}{INDENT}{property_key(field.name)}{marker}: "
                f"{print_type(field.type, level + 1)};"
            )
        lines.append(f"{pad}}}")
        return "\n".join(lines)
    raise TypeError(f"Unsupported type node: {type(node).__name__}")


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


def _escape_template_literal(text: str) -> str:
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def render_url_template(template: PathTemplate) -> str:
    """Render the path as a string literal, or a template literal with
    one ``params`` access per placeholder."""
    if template.is_literal:
        return string_literal(template.path)

    parts = [_escape_template_literal(template.segments[0])]
    for name, segment in zip(template.param_names, template.segments[1:]):
        parts.append("${" + member_access("params", name) + "}")
        parts.append(_escape_template_literal(segment))
    return "`" + "".join(parts) + "`"


def render_base_url(base_url: BaseUrlSpec) -> str:
    if isinstance(base_url, LiteralBaseUrl):
        return string_literal(base_url.url)
    if isinstance(base_url, ReferenceBaseUrl):
        return ".".join(base_url.parts)
    return "undefined"


def render_headers_object(headers: tuple[tuple[str, str], ...]) -> str:
    entries = ", ".join(f"{string_literal(k)}: {string_literal(v)}" for k, v in headers)
    return "{ " + entries + " }" if entries else "{}"


def _doc_lines(unit: CallableUnit) -> list[str]:
    lines: list[str] = []
    for tag in unit.doc_lines:
        lines.extend(tag.replace("*/", "*\\/").splitlines())
    return lines


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


def render_operation(unit: CallableUnit, helper_name: str = DEFAULT_HELPER_NAME) -> str:
    """Render the (optionally documented) function declaration for *unit*."""
    params_key = " | ".join(string_literal(name) for name in unit.path_params)
    return render_template(
        "operation.ts.j2",
        doc_lines=_doc_lines(unit),
        name=unit.name,
        params_key=params_key,
        return_type=print_type(unit.return_type),
        url=render_url_template(unit.template),
        base_url=render_base_url(unit.base_url),
        method=string_literal(unit.method),
        helper_name=helper_name,
        default_headers=render_headers_object(unit.default_headers),
    ).rstrip("\n")


def render_sdk(units: list[CallableUnit], combine_headers_name: str = DEFAULT_HELPER_NAME) -> str:
    """Render the complete source file for *units*.

    Raises:
        InvalidUsageError: If *combine_headers_name* is not a valid identifier.
    """
    pieces = [
        render_template("typed_response.ts.j2").rstrip("\n"),
        render_combine_headers(combine_headers_name).rstrip("\n"),
    ]
    pieces.extend(render_operation(unit, combine_headers_name) for unit in units)
    return "\n\n".join(pieces) + "\n"
