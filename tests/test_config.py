"""Tests for openapi_sdk.config."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from openapi_sdk.config import (
    PROJECT_CONFIG_FILENAME,
    atomic_write,
    get_data_dir,
    load_project_config,
    resolve_config,
)
from openapi_sdk.exceptions import ConfigError


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


# ---------------------------------------------------------------------------
# Data directory
# ---------------------------------------------------------------------------


class TestDataDir:
    """XDG and fallback locations for crash logs."""

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("openapi_sdk.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_data_dir()
        assert result == tmp_path / ".local" / "share" / "openapi-sdk"
        assert result.is_dir()

    def test_data_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_data"
        monkeypatch.setattr("openapi_sdk.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(custom))

        result = get_data_dir()
        assert result == custom / "openapi-sdk"
        assert result.is_dir()

    def test_data_dir_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("openapi_sdk.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_data_dir()
        assert result == tmp_path / ".openapi-sdk" / "logs"
        assert result.is_dir()


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "api.ts"
        atomic_write(target, "export {};\n")
        assert target.read_text(encoding="utf-8") == "export {};\n"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "api.ts"
        target.write_text("old content", encoding="utf-8")
        atomic_write(target, "new content")
        assert target.read_text(encoding="utf-8") == "new content"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "src" / "generated" / "api.ts"
        atomic_write(target, "deep write")
        assert target.read_text(encoding="utf-8") == "deep write"

    def test_no_temp_files_left_on_success(self, tmp_path: Path) -> None:
        target = tmp_path / "api.ts"
        atomic_write(target, "content")
        assert list(tmp_path.iterdir()) == [target]

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "api.ts"
        with patch("openapi_sdk.config.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == []

    def test_failed_write_keeps_previous_file(self, tmp_path: Path) -> None:
        target = tmp_path / "api.ts"
        target.write_text("previous", encoding="utf-8")
        with patch("openapi_sdk.config.os.replace", side_effect=OSError("rename failed")):
            with pytest.raises(OSError):
                atomic_write(target, "new")
        assert target.read_text(encoding="utf-8") == "previous"
        assert list(tmp_path.iterdir()) == [target]

    def test_unicode_content(self, tmp_path: Path) -> None:
        target = tmp_path / "unicode.ts"
        content = "// Hello 世界 \U0001f30d éàüñ\n"
        atomic_write(target, content)
        assert target.read_text(encoding="utf-8") == content


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_load_returns_none_when_missing(self, tmp_path: Path) -> None:
        assert load_project_config(tmp_path) is None

    def test_load_valid_project_config(self, tmp_path: Path) -> None:
        _write_json(tmp_path / PROJECT_CONFIG_FILENAME, {"input": "openapi.yaml"})
        assert load_project_config(tmp_path) == {"input": "openapi.yaml"}

    def test_defaults_to_working_directory(self, isolated_config: Path) -> None:
        _write_json(isolated_config / PROJECT_CONFIG_FILENAME, {"output": "api.ts"})
        assert load_project_config() == {"output": "api.ts"}

    def test_load_invalid_json_raises_config_error(self, tmp_path: Path) -> None:
        (tmp_path / PROJECT_CONFIG_FILENAME).write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config(tmp_path)

    def test_load_non_object_raises_config_error(self, tmp_path: Path) -> None:
        _write_json(tmp_path / PROJECT_CONFIG_FILENAME, ["input"])
        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config(tmp_path)


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    """Test the full precedence chain: CLI > env > project > defaults."""

    @pytest.fixture(autouse=True)
    def _isolate(self, isolated_config: Path) -> None:
        self.tmp_path = isolated_config

    def _write_project(self, data: dict[str, Any]) -> None:
        _write_json(self.tmp_path / PROJECT_CONFIG_FILENAME, data)

    def test_defaults(self) -> None:
        cfg = resolve_config()
        assert cfg.input is None
        assert cfg.output is None
        assert cfg.base_url is None
        assert cfg.helper_name == "combineHeaders"
        assert cfg.headers == []

    def test_project_values(self) -> None:
        self._write_project({"input": "spec.yaml", "output": "src/api.ts", "helperName": "ignored"})
        cfg = resolve_config()
        assert cfg.input == "spec.yaml"
        assert cfg.output == "src/api.ts"

    def test_env_overrides_project(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._write_project({"base_url": "https://project.example.com"})
        monkeypatch.setenv("OPENAPI_SDK_BASE_URL", "https://env.example.com")
        assert resolve_config().base_url == "https://env.example.com"

    def test_empty_env_value_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self._write_project({"output": "api.ts"})
        monkeypatch.setenv("OPENAPI_SDK_OUTPUT", "")
        assert resolve_config().output == "api.ts"

    def test_cli_overrides_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAPI_SDK_INPUT", "env.yaml")
        monkeypatch.setenv("OPENAPI_SDK_HELPER_NAME", "envHeaders")
        cfg = resolve_config(cli_input="cli.yaml", cli_helper_name="cliHeaders")
        assert cfg.input == "cli.yaml"
        assert cfg.helper_name == "cliHeaders"

    def test_none_cli_values_fall_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENAPI_SDK_OUTPUT", "env.ts")
        assert resolve_config(cli_output=None).output == "env.ts"

    def test_headers_are_additive(self) -> None:
        self._write_project({"headers": ["X-Team: sdk"]})
        cfg = resolve_config(cli_headers=["Authorization: Bearer t"])
        assert cfg.headers == ["X-Team: sdk", "Authorization: Bearer t"]

    def test_invalid_value_raises_config_error(self) -> None:
        self._write_project({"headers": "not-a-list"})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()

    def test_invalid_project_file_raises_config_error(self) -> None:
        (self.tmp_path / PROJECT_CONFIG_FILENAME).write_text("[", encoding="utf-8")
        with pytest.raises(ConfigError):
            resolve_config()
