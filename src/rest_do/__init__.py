"""
rest-do - Declarative endpoint client for HTTP APIs.

This package turns an endpoint map (path -> calling convention) into a tree
of callables mirroring the paths, with support for:
- Dot or slash endpoint paths (``user.login`` == ``/user/login/``)
- Parameter-object, keyword and positional call styles
- Required-field and method checks before any request is sent
- Awaitable pending results for every call
- Session cookies and API keys over httpx

Example usage:
    from rest_do import create_client

    async def main():
        client = create_client(
            {
                "ping": None,
                "user/login": {"methods": ["POST"], "required": ["email", "password"]},
                "user/update": {"argNameList": ["id", "name"]},
            },
            base_url="https://example.com/api/",
        )

        # Zero arguments: GET
        await client.api.ping()

        # Parameter object: POST, required fields checked first
        await client.api.user.login({"email": "a@b.com", "password": "secret"})

        # Positional arguments: POST {"id": 42, "name": "Alice"}
        await client.api.user.update(42, "Alice")

        await client.close()

    import asyncio
    asyncio.run(main())
"""

from __future__ import annotations

__version__ = "0.1.0"

from .admin import ApiCore
from .client import ApiClient, create_client
from .config import ClientConfig, configure, configure_from_env, get_config
from .errors import (
    ApiError,
    ConfigurationError,
    EnvironmentMismatchError,
    ErrorCode,
    MethodNotSupportedError,
    TransportError,
    ValidationError,
    is_error_code,
)
from .loader import load_endpoint_map
from .namespace import NamespaceNode
from .paths import normalize_endpoint_path
from .promise import ApiPromise
from .registry import EndpointConfig, EndpointRegistry
from .resolver import ArgumentShape, classify_arguments, resolve_request
from .transport import HttpxTransport, Transport, supports_sessions

__all__ = [
    # Main API
    "create_client",
    "ApiClient",
    "ApiCore",
    "ApiPromise",
    "NamespaceNode",
    # Endpoints
    "EndpointConfig",
    "EndpointRegistry",
    "normalize_endpoint_path",
    "load_endpoint_map",
    "ArgumentShape",
    "classify_arguments",
    "resolve_request",
    # Transport
    "Transport",
    "HttpxTransport",
    "supports_sessions",
    # Configuration
    "ClientConfig",
    "configure",
    "configure_from_env",
    "get_config",
    # Errors
    "ErrorCode",
    "ApiError",
    "ConfigurationError",
    "ValidationError",
    "MethodNotSupportedError",
    "EnvironmentMismatchError",
    "TransportError",
    "is_error_code",
    # Version
    "__version__",
]
