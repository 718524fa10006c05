"""Typer application and CLI entry point for openapi-sdk.

The root :data:`app` carries the shared flags (``--version``,
``--verbose``, ``--quiet``, ``--no-color``, ``--json``, ``--plain``) and the
``generate`` and ``inspect`` sub-commands.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, runs the app, maps
:class:`~openapi_sdk.exceptions.OpenapiSdkError` to its exit code, and
writes a crash log for anything unexpected.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from openapi_sdk import __version__
from openapi_sdk.commands.generate import generate_command
from openapi_sdk.commands.inspect import inspect_command
from openapi_sdk.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="openapi-sdk",
    help="Generate typed TypeScript fetch clients from OpenAPI 3.x documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.command("inspect")(inspect_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"openapi-sdk {__version__}")
        raise typer.Exit()


class _OutputHandler(logging.Handler):
    """Forward package log records to the active OutputManager."""

    def emit(self, record: logging.LogRecord) -> None:
        from openapi_sdk.output import debug, warning

        message = self.format(record)
        if record.levelno >= logging.WARNING:
            warning(message)
        else:
            debug(message)


def _configure_logging(verbose: bool) -> None:
    """Send ``openapi_sdk.*`` log records through the output module.

    Records below WARNING are only emitted with ``--verbose``.
    """
    package_logger = logging.getLogger("openapi_sdk")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, _OutputHandler) for h in package_logger.handlers):
        package_logger.addHandler(_OutputHandler())


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~openapi_sdk.output.OutputManager` and
    configures :mod:`logging` from the shared flags.
    """
    from openapi_sdk.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )
    _configure_logging(verbose)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback under the data directory and return its path."""
    from openapi_sdk.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        encoding="utf-8",
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``openapi-sdk`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from openapi_sdk.exceptions import OpenapiSdkError
        from openapi_sdk.output import error

        if isinstance(exc, OpenapiSdkError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
