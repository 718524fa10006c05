"""Settings resolution, data directories, and atomic file output.

* **Precedence** -- :func:`resolve_config` builds the effective
  :class:`~openapi_sdk.models.GenerateConfig` from, highest first:

  1. CLI flags,
  2. ``OPENAPI_SDK_*`` environment variables,
  3. the project file ``./openapi-sdk.json``,
  4. model defaults.

* **Data directory** -- crash logs go to ``$XDG_DATA_HOME/openapi-sdk/`` on
  Linux/BSD and ``~/.openapi-sdk/logs/`` elsewhere (:func:`get_data_dir`).
* **Atomic writes** -- generated files are written to a temporary sibling
  and renamed into place (:func:`atomic_write`), so an interrupted run never
  leaves a half-written SDK behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from openapi_sdk.exceptions import ConfigError
from openapi_sdk.models import GenerateConfig

_APP_NAME = "openapi-sdk"
PROJECT_CONFIG_FILENAME = "openapi-sdk.json"

ENV_PREFIX = "OPENAPI_SDK_"
_ENV_KEYS = ("input", "output", "base_url", "helper_name")


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/openapi-sdk/`` (default
    ``~/.local/share/openapi-sdk/``). Elsewhere: ``~/.openapi-sdk/logs/``.
    """
    if _is_xdg_platform():
        base = os.environ.get("XDG_DATA_HOME", "")
        root = Path(base) if base else Path.home() / ".local" / "share"
        path = root / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Write *data* to *path* atomically, creating parent directories.

    The temporary file lives next to *path* so ``os.replace`` is a rename
    within one filesystem. It is removed again if anything fails, including
    ``KeyboardInterrupt``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    handle = tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
    )
    try:
        with handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(handle.name, path)
    except BaseException:
        try:
            os.unlink(handle.name)
        except OSError:
            pass
        raise


# --- Project config ---


def load_project_config(directory: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load ``openapi-sdk.json`` from *directory* (default: the working directory).

    Returns:
        The parsed object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not valid JSON or not a JSON object.
    """
    path = (directory or Path.cwd()) / PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _env_overrides() -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key in _ENV_KEYS:
        value = os.environ.get(ENV_PREFIX + key.upper())
        if value:
            values[key] = value
    return values


# --- Precedence resolution ---


def resolve_config(
    cli_input: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_base_url: Optional[str] = None,
    cli_helper_name: Optional[str] = None,
    cli_headers: Optional[list[str]] = None,
) -> GenerateConfig:
    """Merge all configuration sources into one :class:`GenerateConfig`.

    ``None`` CLI values fall through to the next source. Headers are additive:
    project-file headers come first and CLI headers after them, so a CLI
    header overrides a same-named project header when merged.

    Raises:
        ConfigError: If the project file is invalid or a merged value fails
            validation.
    """
    merged: dict[str, Any] = {}

    project = load_project_config()
    if project is not None:
        merged.update(project)

    merged.update(_env_overrides())

    cli_values = {
        "input": cli_input,
        "output": cli_output,
        "base_url": cli_base_url,
        "helper_name": cli_helper_name,
    }
    merged.update({key: value for key, value in cli_values.items() if value is not None})

    if cli_headers:
        merged["headers"] = list(merged.get("headers") or []) + list(cli_headers)

    try:
        return GenerateConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
