"""
Pytest configuration and fixtures for rest-do tests.

This module provides fixtures for:
- A mock transport recording GET/POST calls
- Clients built over the mock transport or an httpx.MockTransport
- A sample endpoint map shared across tests
"""

from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest


@pytest.fixture
def endpoint_map() -> dict[str, Any]:
    """A small endpoint map covering each calling convention."""
    return {
        "ping": None,
        "search": {"methods": ["POST"]},
        "user.login": {"methods": ["POST"], "required": ["email", "password"]},
        "/user/update/": {"argNameList": ["id", "name"]},
        "user/info": {"methods": ["GET", "POST"], "argNameList": ["id"]},
    }


@pytest.fixture
def mock_transport() -> MagicMock:
    """Create a mock transport whose get/post resolve to tagged dicts."""
    transport = MagicMock()
    transport.session_capable = False
    transport.get = AsyncMock(side_effect=lambda path, params=None: {"GET": path})
    transport.post = AsyncMock(side_effect=lambda path, body=None: {"POST": path, "body": body})
    transport.close = AsyncMock()
    return transport


@pytest.fixture
def client(mock_transport: MagicMock, endpoint_map: dict[str, Any]):
    """Create an ApiClient over the mock transport."""
    from rest_do import ApiClient

    return ApiClient(mock_transport, endpoint_map)


@pytest.fixture
def make_http_transport() -> Callable[..., Any]:
    """Build an HttpxTransport whose requests are answered by a handler."""
    from rest_do import HttpxTransport

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        base_url: str = "https://api.example.test/api/",
        **options: Any,
    ) -> HttpxTransport:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return HttpxTransport(base_url, client=client, **options)

    return factory
