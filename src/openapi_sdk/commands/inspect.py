"""Inspect command -- list the operations a document would generate.

Implements ``openapi-sdk inspect``: loads and walks the document exactly as
``generate`` does, then prints one row per operation (method, path,
operationId, generated function name, JSON response codes) instead of
writing any source. Function names assume the default header helper and no
base URL reference. Use the root ``--json`` or ``--plain`` flags for
machine-readable output.
"""

from __future__ import annotations

from typing import Optional

import typer

from openapi_sdk.output import error, info, print_table


def inspect_command(
    source: str = typer.Argument(
        ...,
        help="OpenAPI document: file path, http(s) URL, or '-' for stdin.",
    ),
    header: Optional[list[str]] = typer.Option(
        None,
        "--header",
        "-H",
        help="'Name: value' header for fetching a remote spec. Repeatable.",
    ),
) -> None:
    """List the operations found in an OpenAPI document.

    Example::

        openapi-sdk inspect openapi.yaml
        openapi-sdk --json inspect https://api.example.com/openapi.json
    """
    from openapi_sdk.exceptions import OpenapiSdkError
    from openapi_sdk.generator.headers import parse_header_args
    from openapi_sdk.generator.naming import to_function_name
    from openapi_sdk.generator.operation import module_bindings
    from openapi_sdk.parser import load_spec, validate_openapi_version, walk_document

    try:
        fetch_headers = parse_header_args(header or [])
        raw = load_spec(source, headers=fetch_headers or None)
        version = validate_openapi_version(raw)
        operations = walk_document(raw, source, fetch_headers or None)
    except OpenapiSdkError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not operations:
        info("No operations found.")
        return

    taken = module_bindings()
    rows: list[list[str]] = []
    for op in operations:
        codes = ", ".join(r.status_code for r in op.json_responses)
        rows.append(
            [
                op.method,
                op.path,
                op.operation_id,
                to_function_name(op.operation_id, taken),
                codes or "-",
            ]
        )

    print_table(
        ["Method", "Path", "Operation ID", "Function", "JSON responses"],
        rows,
        title=f"Operations (OpenAPI {version})",
    )
