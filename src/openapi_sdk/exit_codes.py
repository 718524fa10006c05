"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~openapi_sdk.exceptions.OpenapiSdkError` subclass.
Build scripts can inspect the exit code to tell a bad invocation apart from
a broken spec without parsing stderr.

Example::

    $ openapi-sdk generate --input broken.json --output api.ts
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- an operation has no operationId
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required values."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded, parsed, or walked."""
