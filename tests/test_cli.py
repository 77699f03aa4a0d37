"""
Tests for the rest-do command line interface.
"""

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from rest_do import EndpointRegistry, HttpxTransport
from rest_do.cli import cli, parse_value


@pytest.fixture
def map_file(tmp_path: Path) -> Path:
    path = tmp_path / "endpoints.json"
    path.write_text(json.dumps({
        "ping": None,
        "search": {"methods": ["POST"]},
        "user.update": {"argNameList": ["id", "name"]},
    }))
    return path


@pytest.fixture
def requests_seen():
    """Patch the client's transport so requests are answered in-process."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"path": request.url.path})

    def transport_factory(base_url: str = "", **options: Any) -> HttpxTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpxTransport(base_url or "https://cli.test/", client=client, **options)

    with patch("rest_do.client.HttpxTransport", side_effect=transport_factory):
        yield seen


class TestParseValue:
    @pytest.mark.parametrize(
        "raw,expected",
        [("42", 42), ("true", True), ('{"a": 1}', {"a": 1}), ("Alice", "Alice"), ("", "")],
    )
    def test_parse_value(self, raw, expected):
        assert parse_value(raw) == expected


class TestEndpointsCommand:
    def test_lists_endpoints(self, map_file: Path):
        result = CliRunner().invoke(cli, ["endpoints", str(map_file)])

        assert result.exit_code == 0
        assert "ping" in result.output
        assert "[POST]" in result.output
        assert "user/update" in result.output
        assert "id, name" in result.output

    def test_skips_entry_removed_while_listing(self, map_file: Path):
        """A path whose config is gone is skipped, not reported as a crash."""
        registry_get = EndpointRegistry.get

        def get(self, path):
            return None if path == "search" else registry_get(self, path)

        with patch.object(EndpointRegistry, "get", get):
            result = CliRunner().invoke(cli, ["endpoints", str(map_file)])

        assert result.exit_code == 0
        assert "search" not in result.output
        assert "user/update" in result.output

    def test_invalid_map(self, tmp_path: Path):
        path = tmp_path / "endpoints.json"
        path.write_text(json.dumps({"a": None, "a/b": None}))

        result = CliRunner().invoke(cli, ["endpoints", str(path)])

        assert result.exit_code == 1


class TestCallCommand:
    def test_positional_call(self, map_file: Path, requests_seen: list):
        result = CliRunner().invoke(
            cli, ["call", str(map_file), "user.update", "42", "Alice"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(requests_seen[0].content) == {"id": 42, "name": "Alice"}
        assert json.loads(result.output) == {"path": "/user/update"}

    def test_named_params(self, map_file: Path, requests_seen: list):
        result = CliRunner().invoke(
            cli, ["call", str(map_file), "search", "-p", "q=books", "-p", "limit=5"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(requests_seen[0].content) == {"q": "books", "limit": 5}

    def test_zero_argument_get(self, map_file: Path, requests_seen: list):
        result = CliRunner().invoke(
            cli, ["call", str(map_file), "ping", "--base-url", "https://cli.test/api/"]
        )

        assert result.exit_code == 0, result.output
        assert requests_seen[0].method == "GET"
        assert str(requests_seen[0].url) == "https://cli.test/api/ping"

    def test_failed_call_exits_nonzero(self, map_file: Path, requests_seen: list):
        result = CliRunner().invoke(cli, ["call", str(map_file), "search"])

        assert result.exit_code == 1
        assert requests_seen == []

    def test_bad_param(self, map_file: Path, requests_seen: list):
        result = CliRunner().invoke(cli, ["call", str(map_file), "search", "-p", "novalue"])

        assert result.exit_code == 2
