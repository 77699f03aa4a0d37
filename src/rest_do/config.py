"""
Configuration management for rest-do

This module provides global defaults used when a client is created without
explicit options.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_env(key: str) -> str | None:
    """Get environment variable value."""
    return os.environ.get(key)


def _env_timeout(default: float | None = None) -> float | None:
    """Read REST_DO_TIMEOUT, returning ``default`` when unset or unparsable."""
    value = _get_env("REST_DO_TIMEOUT")
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_persistent_session() -> bool | None:
    value = _get_env("REST_DO_PERSISTENT_SESSION")
    if value is None or not value.strip():
        return None
    return value.strip().lower() not in ("0", "false", "no", "off")


@dataclass
class ClientConfig:
    """Client configuration options."""
    base_url: str = ""
    api_key: str | None = None
    timeout: float = 30.0
    persistent_session: bool = True


# Global configuration
_global_config: dict[str, object] = {
    "base_url": _get_env("REST_DO_BASE_URL") or "",
    "api_key": _get_env("REST_DO_API_KEY"),
    "timeout": _env_timeout(30.0),
    "persistent_session": _env_persistent_session() is not False,
}


def configure(
    *,
    base_url: str | None = None,
    api_key: str | None = None,
    timeout: float | None = None,
    persistent_session: bool | None = None,
) -> None:
    """
    Configure client defaults.

    Args:
        base_url: URL endpoint paths are resolved against
        api_key: API key sent with every request
        timeout: Request timeout in seconds (default: 30)
        persistent_session: Keep cookies from responses (default: True)

    Example::

        from rest_do import configure

        configure(base_url="https://example.com/api/", timeout=10)
    """
    global _global_config

    if base_url is not None:
        _global_config["base_url"] = base_url
    if api_key is not None:
        _global_config["api_key"] = api_key
    if timeout is not None:
        _global_config["timeout"] = timeout
    if persistent_session is not None:
        _global_config["persistent_session"] = persistent_session


def get_config() -> ClientConfig:
    """
    Get current client configuration.

    Example::

        from rest_do import get_config

        config = get_config()
        print(f"Base URL: {config.base_url}")
    """
    return ClientConfig(
        base_url=str(_global_config["base_url"] or ""),
        api_key=_global_config["api_key"] or None,  # type: ignore[arg-type]
        timeout=float(_global_config["timeout"]),  # type: ignore[arg-type]
        persistent_session=bool(_global_config["persistent_session"]),
    )


def configure_from_env() -> None:
    """
    Configure client defaults from environment variables.

    Reads from:
        - REST_DO_BASE_URL
        - REST_DO_API_KEY
        - REST_DO_TIMEOUT
        - REST_DO_PERSISTENT_SESSION
    """
    configure(
        base_url=_get_env("REST_DO_BASE_URL"),
        api_key=_get_env("REST_DO_API_KEY"),
        timeout=_env_timeout(),
        persistent_session=_env_persistent_session(),
    )
