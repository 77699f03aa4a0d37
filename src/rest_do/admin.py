"""
ApiCore - administrative sub-namespace of an ApiClient.

Exposes the transport settings a caller may adjust at runtime: base URL,
API key, session persistence and the session cookie string. Session and
cookie operations need a transport that keeps session state.
"""

from __future__ import annotations

from typing import Any

from .errors import ConfigurationError, EnvironmentMismatchError
from .transport import supports_sessions

__all__ = ["ApiCore"]


class ApiCore:
    """
    Administrative operations for a client's transport.

    Example:
        client.core.base_url("https://example.com/api/")
        client.core.api_key("secret")
        client.core.set_cookie_string("JSESSIONID=abc")
    """

    __slots__ = ("_transport",)

    def __init__(self, transport: Any) -> None:
        self._transport = transport

    def supports_sessions(self) -> bool:
        """Whether the transport can keep session cookies."""
        return supports_sessions(self._transport)

    def base_url(self, value: str | None = None) -> str:
        """
        Get the base URL, replacing it first when ``value`` is given.

        Raises:
            ConfigurationError: If the transport has no configurable base URL
        """
        if not hasattr(self._transport, "base_url"):
            raise ConfigurationError(
                f"{type(self._transport).__name__} does not expose a base URL"
            )
        if value:
            self._transport.base_url = value
        return self._transport.base_url

    def api_key(self, value: str) -> None:
        """Set the API key. The configured key cannot be read back."""
        if not hasattr(self._transport, "api_key"):
            raise ConfigurationError(
                f"{type(self._transport).__name__} does not accept an API key"
            )
        if value:
            self._transport.api_key = value

    def persistent_session(self, enabled: bool) -> None:
        """Turn capture of response cookies on or off."""
        self._require_sessions()
        self._transport.persistent_session = bool(enabled)

    def set_cookie_string(self, cookie_string: str | None) -> None:
        """Replace the session cookies with a ``name=value; ...`` string."""
        self._require_sessions()
        self._transport.cookie_string = cookie_string

    def get_cookie_string(self) -> str | None:
        """The current session cookies as a ``Cookie`` header value."""
        self._require_sessions()
        return self._transport.cookie_string

    def _require_sessions(self) -> None:
        if not supports_sessions(self._transport):
            raise EnvironmentMismatchError(
                f"{type(self._transport).__name__} does not support persistent sessions"
            )

    def __repr__(self) -> str:
        return f"ApiCore({self._transport!r})"
