"""Generate command -- write a typed TypeScript fetch client for a spec.

Implements ``openapi-sdk generate``. Settings come from
:func:`~openapi_sdk.config.resolve_config` (flags, ``OPENAPI_SDK_*``
environment variables, ``./openapi-sdk.json``). The whole file is rendered
in memory and then written atomically, so a document with a malformed
operation never produces partial output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from openapi_sdk.output import debug, error, print_data, success, suggest, warning


def generate_command(
    input: Optional[str] = typer.Option(
        None,
        "--input",
        "-i",
        help="OpenAPI document: file path, http(s) URL, or '-' for stdin.",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Destination .ts file, or '-' for stdout.",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Absolute URL, or a dotted reference such as import.meta.env.API_URL.",
    ),
    header: Optional[list[str]] = typer.Option(
        None,
        "--header",
        "-H",
        help="'Name: value' header for fetching a remote spec. Repeatable.",
    ),
    helper_name: Optional[str] = typer.Option(
        None,
        "--helper-name",
        help="Name of the emitted header merge helper (default: combineHeaders).",
    ),
) -> None:
    """Generate a TypeScript client from an OpenAPI 3.x document.

    Every operation becomes one exported function that builds the request
    URL, merges default and caller headers, and calls ``fetch``.

    Example::

        openapi-sdk generate --input openapi.yaml --output src/api.ts
        openapi-sdk generate -i https://api.example.com/openapi.json \\
            -o src/api.ts --base-url import.meta.env.VITE_API_URL
        curl -s https://api.example.com/spec | openapi-sdk generate -i - -o -
    """
    from openapi_sdk.config import atomic_write, resolve_config
    from openapi_sdk.exceptions import InvalidUsageError, OpenapiSdkError
    from openapi_sdk.generator.headers import parse_header_args
    from openapi_sdk.generator.operation import parse_base_url
    from openapi_sdk.parser import load_spec
    from openapi_sdk.pipeline import generate_sdk

    try:
        config = resolve_config(
            cli_input=input,
            cli_output=output,
            cli_base_url=base_url,
            cli_helper_name=helper_name,
            cli_headers=header,
        )
        if not config.input:
            raise InvalidUsageError("Missing input. Pass --input <path|url|->.")
        if not config.output:
            raise InvalidUsageError("Missing output. Pass --output <path|->.")

        base = parse_base_url(config.base_url)
        fetch_headers = parse_header_args(config.headers)

        debug(f"Loading spec from: {config.input}")
        raw = load_spec(config.input, headers=fetch_headers or None)
        result = generate_sdk(
            raw,
            base_url=base,
            helper_name=config.helper_name,
            source=config.input,
            fetch_headers=fetch_headers or None,
        )
    except OpenapiSdkError as exc:
        error(str(exc))
        if isinstance(exc, InvalidUsageError):
            suggest("See: openapi-sdk generate --help")
        raise typer.Exit(code=exc.exit_code) from None

    for diagnostic in result.diagnostics:
        warning(str(diagnostic))

    if config.output == "-":
        print_data(result.source.rstrip("\n"))
        return

    destination = Path(config.output)
    try:
        atomic_write(destination, result.source)
    except OSError as exc:
        error(f"Failed to write {destination}: {exc}")
        raise typer.Exit(code=1) from None

    success(
        f"Generated {len(result.units)} operation(s) from OpenAPI "
        f"{result.openapi_version} into {destination}"
    )
