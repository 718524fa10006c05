"""openapi-sdk -- Generate typed TypeScript ``fetch`` clients from OpenAPI 3.x specs.

This package reads an OpenAPI document, resolves its ``$ref`` pointers, and
writes a single TypeScript module containing one exported function per
operation plus the small runtime helpers those functions share.

Typical workflow::

    openapi-sdk generate --input openapi.json --output src/api.ts \\
        --base-url https://api.example.com

The generated module declares a ``TypedResponse<T>`` type and exports a
``combineHeaders`` helper and one ``fetch`` wrapper per ``operationId``.

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Project config and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
