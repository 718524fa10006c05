"""Shared test fixtures for openapi-sdk.

Provides the petstore fixture document, an isolated config environment,
output state management, and a CLI runner. Fixtures are discovered by
pytest automatically.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from openapi_sdk.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager keeps references to sys.stdout/sys.stderr from the moment it
    was created. CliRunner swaps those streams per invocation, so a stale
    manager would write to a closed file in the next test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_path() -> Path:
    """Path to the petstore 3.0 fixture on disk."""
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def petstore_raw(petstore_path: Path) -> dict[str, Any]:
    """Raw petstore 3.0 document (``$ref`` pointers unresolved)."""
    with open(petstore_path, encoding="utf-8") as f:
        return json.load(f)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME below tmp_path, clears every OPENAPI_SDK_*
    variable and changes the working directory to tmp_path so that no
    project ``openapi-sdk.json`` leaks in.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "OPENAPI_SDK_INPUT",
        "OPENAPI_SDK_OUTPUT",
        "OPENAPI_SDK_BASE_URL",
        "OPENAPI_SDK_HELPER_NAME",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN-format OutputManager for the duration of a test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
