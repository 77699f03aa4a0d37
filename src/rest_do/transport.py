"""
HTTP transport for rest-do.

The dispatch core only needs two coroutines, ``get`` and ``post``. This
module defines that protocol and ships HttpxTransport, an implementation on
httpx.AsyncClient that also keeps the session cookie string and API key.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any, Protocol

import httpx

from .errors import TransportError

__all__ = ["Transport", "HttpxTransport", "supports_sessions"]

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Minimal transport interface consumed by the dispatch core.

    Both methods must report HTTP and network failures by raising from the
    coroutine, never from the call that creates it.
    """

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        ...

    async def post(self, path: str, body: Mapping[str, Any] | None = None) -> Any:
        ...


def supports_sessions(transport: Any) -> bool:
    """Whether a transport can keep session cookies between requests."""
    return bool(getattr(transport, "session_capable", False))


class HttpxTransport:
    """
    Transport backed by httpx.AsyncClient.

    Request and response event hooks handle the session: every request
    carries the current cookie string and API key, and every response's
    Set-Cookie headers are merged back into the cookie string while
    persistent sessions are enabled.

    Example:
        transport = HttpxTransport("https://example.com/api/", api_key="key")
        response = await transport.post("user/login", {"email": "a@b.com"})
        await transport.close()
    """

    session_capable = True

    def __init__(
        self,
        base_url: str = "",
        *,
        api_key: str | None = None,
        timeout: float = 30.0,
        persistent_session: bool = True,
        headers: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            base_url: URL that endpoint paths are resolved against
            api_key: Optional API key sent as a bearer token
            timeout: Request timeout in seconds
            persistent_session: Capture Set-Cookie values from responses
            headers: Extra headers sent with every request
            client: Pre-built httpx.AsyncClient. Its event hooks are extended
                and ``headers`` are added to it; its own timeout is kept.
        """
        self._base_url = base_url
        self._api_key = api_key
        self._timeout = timeout
        self._headers = dict(headers or {})
        self._cookies: dict[str, str] = {}
        self._client = client
        self.persistent_session = persistent_session
        if client is not None:
            self._install_hooks(client)
            client.headers.update(self._headers)
            if base_url:
                client.base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        self._base_url = value
        if self._client is not None:
            self._client.base_url = value

    @property
    def api_key(self) -> None:
        """The API key is write-only."""
        return None

    @api_key.setter
    def api_key(self, value: str | None) -> None:
        self._api_key = value

    @property
    def cookie_string(self) -> str | None:
        """Session cookies as a ``Cookie`` header value, or None if empty."""
        if not self._cookies:
            return None
        return "; ".join(f"{name}={value}" for name, value in self._cookies.items())

    @cookie_string.setter
    def cookie_string(self, value: str | None) -> None:
        self._cookies = {}
        if value:
            self._merge_cookies(value.split(";"))

    def _merge_cookies(self, pairs: list[str]) -> None:
        for pair in pairs:
            name, sep, value = pair.strip().partition("=")
            if sep and name:
                self._cookies[name.strip()] = value.strip()

    def _install_hooks(self, client: httpx.AsyncClient) -> None:
        hooks = client.event_hooks
        hooks["request"] = [*hooks.get("request", []), self._on_request]
        hooks["response"] = [*hooks.get("response", []), self._on_response]
        client.event_hooks = hooks

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers,
            )
            self._install_hooks(self._client)
        return self._client

    async def _on_request(self, request: httpx.Request) -> None:
        cookie_string = self.cookie_string
        if cookie_string is not None:
            request.headers["Cookie"] = cookie_string
        else:
            request.headers.pop("Cookie", None)
        if self._api_key:
            request.headers["Authorization"] = f"Bearer {self._api_key}"
        logger.debug("%s %s", request.method, request.url)

    async def _on_response(self, response: httpx.Response) -> None:
        logger.debug(
            "%s %s -> %s", response.request.method, response.request.url, response.status_code
        )
        if not self.persistent_session:
            return
        # Only the name=value part of each Set-Cookie header is kept
        set_cookies = response.headers.get_list("set-cookie")
        if set_cookies:
            self._merge_cookies([header.split(";", 1)[0] for header in set_cookies])

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        """Send a GET request."""
        return await self._request("GET", path, params=dict(params) if params else None)

    async def post(self, path: str, body: Mapping[str, Any] | None = None) -> httpx.Response:
        """Send a POST request with a JSON body."""
        return await self._request("POST", path, json=dict(body) if body is not None else None)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"{method} {path} failed with status {e.response.status_code}",
                status=e.response.status_code,
                response=e.response,
            ) from e
        except httpx.RequestError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        except httpx.InvalidURL as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        return response

    async def close(self) -> None:
        """Close the underlying httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> HttpxTransport:
        self._get_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"HttpxTransport({self._base_url or '<no base url>'})"
