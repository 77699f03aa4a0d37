"""
ApiClient - declarative endpoint client.

The client turns an endpoint map into a namespace tree of callables and
dispatches each call as a single GET or POST through its transport.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import TracebackType
from typing import Any

from .admin import ApiCore
from .config import get_config
from .errors import ApiError
from .namespace import NamespaceNode, register_namespace
from .paths import normalize_endpoint_path
from .promise import ApiPromise
from .registry import EndpointConfig, EndpointRegistry
from .resolver import ResolvedRequest, resolve_request
from .transport import HttpxTransport, Transport

__all__ = ["ApiClient", "create_client"]


class ApiClient:
    """
    Endpoint client with a namespace tree built from an endpoint map.

    Endpoints are reached through ``client.api``; transport settings through
    ``client.core``. Every call returns an ApiPromise immediately.

    Example:
        client = create_client(
            {
                "ping": None,
                "user.login": {"methods": ["POST"], "required": ["email", "password"]},
                "user/update": {"argNameList": ["id", "name"]},
            },
            base_url="https://example.com/api/",
        )

        await client.api.ping()                                  # GET ping
        await client.api.user.login(email="a@b.com", password="x")  # POST object
        await client.api.user.update(42, "Alice")                # POST {id, name}

        await client.close()
    """

    __slots__ = ("_transport", "_registry", "_root", "_core")

    def __init__(
        self,
        transport: Transport,
        endpoints: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            transport: Transport used for every request
            endpoints: Endpoint map of path -> config entry
        """
        self._transport = transport
        self._root = NamespaceNode()
        self._registry = EndpointRegistry(on_register=self._build_namespace)
        self._core = ApiCore(transport)
        if endpoints is not None:
            self._registry.register_many(endpoints)

    @property
    def api(self) -> NamespaceNode:
        """Root of the endpoint namespace tree."""
        return self._root

    @property
    def core(self) -> ApiCore:
        """Administrative operations (base URL, API key, session cookies)."""
        return self._core

    @property
    def registry(self) -> EndpointRegistry:
        return self._registry

    @property
    def transport(self) -> Transport:
        return self._transport

    def _build_namespace(self, path: str) -> None:
        register_namespace(self._root, path, self._make_endpoint_function)

    def _make_endpoint_function(self, path: str) -> Callable[..., ApiPromise[Any]]:
        def endpoint(*args: Any, **kwargs: Any) -> ApiPromise[Any]:
            return self.dispatch(path, args, kwargs)

        endpoint.__name__ = path.rsplit("/", 1)[-1]
        endpoint.__qualname__ = path.replace("/", ".")
        return endpoint

    def set_endpoint(self, path: str, config: Any = None) -> EndpointConfig:
        """
        Register or update one endpoint.

        Raises:
            ConfigurationError: If the path or config is invalid, or the path
                conflicts with the existing namespace tree
        """
        return self._registry.register(path, config)

    def set_endpoint_map(self, endpoints: Mapping[str, Any] | None) -> None:
        """Register every entry of an endpoint map, in order."""
        if endpoints is not None:
            self._registry.register_many(endpoints)

    def call(self, path: str, *args: Any, **kwargs: Any) -> ApiPromise[Any]:
        """
        Call an endpoint by path, without going through the namespace tree.

        Example:
            await client.call("user.update", 42, "Alice")
        """
        return self.dispatch(normalize_endpoint_path(path), args, kwargs)

    def dispatch(
        self,
        path: str,
        args: tuple[Any, ...] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> ApiPromise[Any]:
        """
        Resolve a call against the current config and return its pending result.

        Never raises: configuration, validation and method errors come back
        as a rejected promise, as do transport failures. The request is sent
        only when the promise is first awaited, so a call that is never
        awaited sends nothing.

        Args:
            path: Canonical endpoint path
            args: Positional call arguments
            kwargs: Keyword call arguments
        """
        try:
            request = resolve_request(path, self._registry.get(path), args, kwargs)
        except ApiError as e:
            return ApiPromise.rejected(e, path)
        return ApiPromise(lambda: self._send(request), path)

    def _send(self, request: ResolvedRequest) -> Any:
        if request.method == "GET":
            return self._transport.get(request.path, request.payload)
        return self._transport.post(request.path, request.payload)

    async def close(self) -> None:
        """Close the transport, if it can be closed."""
        close = getattr(self._transport, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"ApiClient({len(self._registry)} endpoints, {self._transport!r})"


def create_client(
    endpoints: Mapping[str, Any] | None = None,
    *,
    base_url: str | None = None,
    api_key: str | None = None,
    timeout: float | None = None,
    persistent_session: bool | None = None,
    transport: Transport | None = None,
) -> ApiClient:
    """
    Create a client for an endpoint map.

    Options not given fall back to the global configuration (see
    ``rest_do.configure`` and the REST_DO_* environment variables).

    Args:
        endpoints: Endpoint map of path -> config entry
        base_url: URL endpoint paths are resolved against
        api_key: API key sent with every request
        timeout: Request timeout in seconds
        persistent_session: Keep cookies from responses
        transport: Custom transport; the other options are then ignored

    Example:
        async with create_client({"ping": None}, base_url="https://example.com/") as client:
            response = await client.api.ping()
    """
    if transport is None:
        config = get_config()
        transport = HttpxTransport(
            base_url if base_url is not None else config.base_url,
            api_key=api_key if api_key is not None else config.api_key,
            timeout=timeout if timeout is not None else config.timeout,
            persistent_session=(
                persistent_session
                if persistent_session is not None
                else config.persistent_session
            ),
        )
    return ApiClient(transport, endpoints)
