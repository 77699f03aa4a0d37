"""
Unit tests for the ApiCore administrative sub-namespace.
"""

from unittest.mock import MagicMock

import pytest

from rest_do import (
    ApiClient,
    ConfigurationError,
    EnvironmentMismatchError,
    HttpxTransport,
    create_client,
)


@pytest.fixture
def http_client() -> ApiClient:
    return create_client({"ping": None}, base_url="https://example.test/api/")


class TestBaseUrlAndApiKey:
    """Base URL and API key."""

    def test_get_base_url(self, http_client: ApiClient):
        assert http_client.core.base_url() == "https://example.test/api/"

    def test_set_base_url(self, http_client: ApiClient):
        assert http_client.core.base_url("https://other.test/") == "https://other.test/"
        assert http_client.transport.base_url == "https://other.test/"

    def test_empty_value_keeps_base_url(self, http_client: ApiClient):
        assert http_client.core.base_url("") == "https://example.test/api/"

    def test_api_key_is_write_only(self, http_client: ApiClient):
        assert http_client.core.api_key("secret") is None
        assert http_client.transport._api_key == "secret"

    def test_transport_without_base_url(self):
        class BareTransport:
            async def get(self, path, params=None):
                return None

            async def post(self, path, body=None):
                return None

        client = ApiClient(BareTransport(), {"ping": None})

        with pytest.raises(ConfigurationError):
            client.core.base_url()
        with pytest.raises(ConfigurationError):
            client.core.api_key("secret")


class TestSessions:
    """Session and cookie operations."""

    def test_cookie_string_round_trip(self, http_client: ApiClient):
        http_client.core.set_cookie_string("JSESSIONID=abc")
        assert http_client.core.get_cookie_string() == "JSESSIONID=abc"

    def test_persistent_session_toggle(self, http_client: ApiClient):
        http_client.core.persistent_session(False)
        assert http_client.transport.persistent_session is False

        http_client.core.persistent_session(True)
        assert http_client.transport.persistent_session is True

    def test_supports_sessions(self, http_client: ApiClient, client: ApiClient):
        assert http_client.core.supports_sessions()
        assert not client.core.supports_sessions()

    @pytest.mark.parametrize(
        "operation",
        [
            lambda core: core.persistent_session(True),
            lambda core: core.set_cookie_string("a=1"),
            lambda core: core.get_cookie_string(),
        ],
        ids=["persistent_session", "set_cookie_string", "get_cookie_string"],
    )
    def test_environment_mismatch(self, client: ApiClient, mock_transport: MagicMock, operation):
        """Transports without session support reject session operations."""
        with pytest.raises(EnvironmentMismatchError):
            operation(client.core)

    def test_repr(self):
        client = ApiClient(HttpxTransport("https://example.test/"))
        assert repr(client.core) == "ApiCore(HttpxTransport(https://example.test/))"
