"""Tests for openapi_sdk.parser.loader."""

from __future__ import annotations

import io
import json
import textwrap
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from openapi_sdk.exceptions import SpecParseError
from openapi_sdk.parser.loader import (
    _fetch_url,
    _parse_content,
    _read_file,
    load_spec,
    validate_openapi_version,
)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _response(status_code: int = 200, url: str = "https://example.com/spec.json", **kwargs) -> httpx.Response:
    return httpx.Response(status_code=status_code, request=httpx.Request("GET", url), **kwargs)


# ---------------------------------------------------------------------------
# load_spec dispatch
# ---------------------------------------------------------------------------


class TestLoadSpec:
    """Test load_spec dispatcher routes to the correct reader."""

    def test_loads_from_file_json(self) -> None:
        result = load_spec(str(FIXTURES_DIR / "petstore.json"))
        assert result["openapi"].startswith("3.")
        assert "/pets" in result["paths"]

    def test_loads_from_file_yaml(self, tmp_path: Path) -> None:
        yaml_content = textwrap.dedent("""\
            openapi: "3.0.3"
            info:
              title: YAML Test
              version: "1.0.0"
            paths: {}
        """)
        yaml_file = tmp_path / "spec.yaml"
        yaml_file.write_text(yaml_content, encoding="utf-8")
        result = load_spec(str(yaml_file))
        assert result["openapi"] == "3.0.3"
        assert result["info"]["title"] == "YAML Test"

    def test_loads_from_yml_extension(self, tmp_path: Path) -> None:
        yml_file = tmp_path / "spec.yml"
        yml_file.write_text('openapi: "3.1.0"\npaths: {}\n', encoding="utf-8")
        assert load_spec(str(yml_file))["openapi"] == "3.1.0"

    def test_unknown_extension_sniffs_format(self, tmp_path: Path) -> None:
        spec_file = tmp_path / "spec.txt"
        spec_file.write_text('openapi: "3.0.0"\npaths: {}\n', encoding="utf-8")
        assert load_spec(str(spec_file))["openapi"] == "3.0.0"

    def test_loads_from_stdin(self) -> None:
        spec_json = json.dumps({"openapi": "3.0.3", "info": {"title": "stdin test", "version": "1.0"}})
        with patch("openapi_sdk.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(spec_json)
            result = load_spec("-")
        assert result["info"]["title"] == "stdin test"

    def test_loads_from_url(self) -> None:
        spec = {"openapi": "3.0.3", "info": {"title": "URL test", "version": "1.0"}}
        with patch("openapi_sdk.parser.loader.httpx.get", return_value=_response(json=spec)):
            result = load_spec("https://example.com/spec.json")
        assert result["info"]["title"] == "URL test"

    def test_url_headers_passed_through(self) -> None:
        spec = {"openapi": "3.0.3", "paths": {}}
        with patch("openapi_sdk.parser.loader.httpx.get", return_value=_response(json=spec)) as mock_get:
            load_spec("https://example.com/spec.json", headers=[("Authorization", "Bearer t")])

        sent = mock_get.call_args.kwargs["headers"]
        assert sent["authorization"] == "Bearer t"
        assert sent["accept"].startswith("application/json")
        assert mock_get.call_args.kwargs["follow_redirects"] is True

    def test_url_headers_override_accept(self) -> None:
        spec = {"openapi": "3.0.3", "paths": {}}
        with patch("openapi_sdk.parser.loader.httpx.get", return_value=_response(json=spec)) as mock_get:
            load_spec("https://example.com/spec.json", headers={"accept": "application/yaml"})

        assert mock_get.call_args.kwargs["headers"]["Accept"] == "application/yaml"


# ---------------------------------------------------------------------------
# _read_file
# ---------------------------------------------------------------------------


class TestReadFile:
    """Test reading specs from local files."""

    def test_json_hint_from_extension(self) -> None:
        content, hint = _read_file(str(FIXTURES_DIR / "petstore.json"))
        assert hint == "json"
        assert '"paths"' in content

    def test_yaml_hint_from_extension(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.YAML"
        yaml_file.write_text("openapi: 3.0.0\n", encoding="utf-8")
        assert _read_file(str(yaml_file))[1] == "yaml"

    def test_file_not_found_raises(self) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            _read_file("/nonexistent/path/to/spec.json")

    def test_directory_is_not_a_file(self, tmp_path: Path) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            _read_file(str(tmp_path))

    def test_empty_file_raises(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(SpecParseError, match="empty"):
            _read_file(str(empty))

    def test_invalid_json_file_raises(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{invalid json", encoding="utf-8")
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            load_spec(str(bad))

    def test_non_object_json_raises(self, tmp_path: Path) -> None:
        array_file = tmp_path / "array.json"
        array_file.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            load_spec(str(array_file))


# ---------------------------------------------------------------------------
# stdin
# ---------------------------------------------------------------------------


class TestReadStdin:
    """Test reading specs from stdin."""

    def test_reads_yaml_from_stdin(self) -> None:
        yaml_content = textwrap.dedent("""\
            openapi: "3.0.0"
            info:
              title: YAML stdin
              version: "1.0"
        """)
        with patch("openapi_sdk.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO(yaml_content)
            result = load_spec("-")
        assert result["info"]["title"] == "YAML stdin"

    def test_empty_stdin_raises(self) -> None:
        with patch("openapi_sdk.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("")
            with pytest.raises(SpecParseError, match="No input"):
                load_spec("-")

    def test_whitespace_only_stdin_raises(self) -> None:
        with patch("openapi_sdk.parser.loader.sys") as mock_sys:
            mock_sys.stdin = io.StringIO("   \n\t\n  ")
            with pytest.raises(SpecParseError, match="No input"):
                load_spec("-")


# ---------------------------------------------------------------------------
# _fetch_url
# ---------------------------------------------------------------------------


class TestFetchUrl:
    """Test fetching specs over HTTP."""

    def test_json_content_type_hint(self) -> None:
        with patch("openapi_sdk.parser.loader.httpx.get", return_value=_response(json={"a": 1})):
            content, hint = _fetch_url("https://example.com/spec.json", None)
        assert hint == "json"
        assert json.loads(content) == {"a": 1}

    def test_yaml_content_type_hint(self) -> None:
        mock_response = _response(
            text="openapi: 3.0.0\n",
            headers={"content-type": "application/x-yaml"},
            url="https://example.com/spec.yaml",
        )
        with patch("openapi_sdk.parser.loader.httpx.get", return_value=mock_response):
            assert _fetch_url("https://example.com/spec.yaml", None)[1] == "yaml"

    def test_loads_yaml_from_url(self) -> None:
        yaml_body = textwrap.dedent("""\
            openapi: "3.0.0"
            info:
              title: YAML Remote
              version: "1.0"
        """)
        mock_response = _response(
            text=yaml_body,
            headers={"content-type": "application/x-yaml"},
            url="https://example.com/spec.yaml",
        )
        with patch("openapi_sdk.parser.loader.httpx.get", return_value=mock_response):
            result = load_spec("https://example.com/spec.yaml")
        assert result["info"]["title"] == "YAML Remote"

    def test_http_error_raises(self) -> None:
        with patch("openapi_sdk.parser.loader.httpx.get", return_value=_response(404)):
            with pytest.raises(SpecParseError, match="HTTP 404"):
                _fetch_url("https://example.com/spec.json", None)

    def test_connection_error_raises(self) -> None:
        with patch(
            "openapi_sdk.parser.loader.httpx.get",
            side_effect=httpx.ConnectError("Connection refused"),
        ):
            with pytest.raises(SpecParseError, match="Failed to fetch"):
                _fetch_url("https://unreachable.example.com/spec.json", None)


# ---------------------------------------------------------------------------
# _parse_content
# ---------------------------------------------------------------------------


class TestParseContent:
    """Test content parsing with format detection."""

    def test_parses_json(self) -> None:
        assert _parse_content('{"key": "value"}') == {"key": "value"}

    def test_parses_yaml(self) -> None:
        result = _parse_content("key: value\nnested:\n  a: 1")
        assert result == {"key": "value", "nested": {"a": 1}}

    def test_json_hint_forces_json_only(self) -> None:
        with pytest.raises(SpecParseError, match="Invalid JSON"):
            _parse_content("key: value", hint="json")

    def test_yaml_hint_skips_json(self) -> None:
        assert _parse_content("key: value", hint="yaml") == {"key": "value"}

    def test_invalid_content_raises(self) -> None:
        with pytest.raises(SpecParseError, match="Failed to parse"):
            _parse_content("}{not valid at all][", hint="")

    def test_non_dict_content_raises(self) -> None:
        with pytest.raises(SpecParseError, match="must be a JSON/YAML object"):
            _parse_content('"just a string"')

    def test_null_yaml_raises(self) -> None:
        with pytest.raises(SpecParseError, match="empty document"):
            _parse_content("---\n", hint="yaml")


# ---------------------------------------------------------------------------
# validate_openapi_version
# ---------------------------------------------------------------------------


class TestValidateOpenAPIVersion:
    """Test OpenAPI version validation."""

    @pytest.mark.parametrize("version", ["3.0.0", "3.0.3", "3.1.0", "3.1.1", "3.2.0"])
    def test_accepts_3_x(self, version: str) -> None:
        assert validate_openapi_version({"openapi": version}) == version

    def test_rejects_swagger_2_0(self) -> None:
        with pytest.raises(SpecParseError, match="Swagger 2.0.*not supported"):
            validate_openapi_version({"swagger": "2.0"})

    def test_rejects_missing_openapi_field(self) -> None:
        with pytest.raises(SpecParseError, match="Missing 'openapi' field"):
            validate_openapi_version({"info": {"title": "test"}})

    def test_rejects_unsupported_version(self) -> None:
        with pytest.raises(SpecParseError, match="Unsupported OpenAPI version"):
            validate_openapi_version({"openapi": "4.0.0"})

    def test_rejects_version_2_0_without_swagger_key(self) -> None:
        with pytest.raises(SpecParseError, match="Unsupported OpenAPI version"):
            validate_openapi_version({"openapi": "2.0.0"})

    def test_version_as_number(self) -> None:
        # Unquoted YAML versions arrive as floats
        assert validate_openapi_version({"openapi": 3.0}) == "3.0"
