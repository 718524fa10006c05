"""Exception hierarchy for openapi-sdk.

All exceptions inherit from :class:`OpenapiSdkError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`openapi_sdk.exit_codes`.
The top-level error handler in :func:`openapi_sdk.app.main` catches
``OpenapiSdkError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Every error here is fatal: generation aborts before anything is written.
Unrecognised schema shapes are *not* errors; they are reported through
:class:`~openapi_sdk.generator.diagnostics.Diagnostics` instead.

Subclass hierarchy::

    OpenapiSdkError (exit 1)
    +-- InvalidUsageError          (exit 2)
    +-- SpecParseError             (exit 7)
    |   +-- MalformedOperationError (exit 7)
    +-- ConfigError                (exit 1)
"""

from openapi_sdk.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class OpenapiSdkError(Exception):
    """Base exception for all openapi-sdk errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`openapi_sdk.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(OpenapiSdkError):
    """Raised for invalid CLI values (missing input/output, bad ``--base-url`` or ``--header``)."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(OpenapiSdkError):
    """Raised when the OpenAPI document cannot be loaded, parsed, or has no ``paths``."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class MalformedOperationError(SpecParseError):
    """Raised when a path-item entry cannot become an operation.

    Covers entries whose value is an array or a bare string, and operations
    without an ``operationId``. The offending path and method are kept on the
    instance so callers can point at the exact spot in the document.
    """

    def __init__(self, message: str, path: str = "", method: str = ""):
        location = f" ({method.upper()} {path})" if path else ""
        super().__init__(f"{message}{location}")
        self.path = path
        self.method = method


class ConfigError(OpenapiSdkError):
    """Raised for configuration problems (invalid project config JSON or values)."""

    exit_code = EXIT_GENERIC_FAILURE
