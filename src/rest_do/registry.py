"""
Endpoint registry - the single source of truth for endpoint configuration.

Each registered path maps to an immutable EndpointConfig describing which
HTTP methods the endpoint accepts, the argument names used for positional
calls, and the fields a parameter object must carry.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

import pydantic
from pydantic import BaseModel, Field, field_validator

from .errors import ConfigurationError
from .paths import normalize_endpoint_path

__all__ = ["EndpointConfig", "EndpointRegistry"]

logger = logging.getLogger(__name__)


class EndpointConfig(BaseModel):
    """Pydantic model for one endpoint map entry.

    Supports both camelCase (argNameList) and snake_case (arg_names) keys so
    maps produced by server-side generators load unchanged. Unknown keys are
    ignored for forward compatibility.

    An empty ``methods`` set means the endpoint does not restrict methods.
    """

    path: str = ""
    methods: frozenset[str] = Field(default_factory=frozenset)
    arg_names: tuple[str, ...] = Field(default=(), alias="argNameList")
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("methods", mode="before")
    @classmethod
    def normalize_methods(cls, v: Any) -> Any:
        """Upper-case method names; accept None or a single string."""
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple, set, frozenset)):
            return frozenset(str(method).strip().upper() for method in v)
        return v

    @field_validator("arg_names", "required", "optional", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        if v is None:
            return ()
        if isinstance(v, str):
            return (v,)
        return v

    def allows(self, method: str) -> bool:
        """Whether the endpoint accepts the given HTTP method."""
        return not self.methods or method.upper() in self.methods

    @classmethod
    def parse(cls, value: Any, path: str = "") -> EndpointConfig:
        """
        Build an EndpointConfig from any accepted endpoint map entry.

        Accepted forms:
            - None: no restrictions, no argument names
            - a mapping with methods/argNameList/required/optional keys
            - a list or tuple of names: shorthand for the argument name list
            - an EndpointConfig instance

        Raises:
            ConfigurationError: If the entry cannot be validated
        """
        if isinstance(value, EndpointConfig):
            return value if value.path == path else value.model_copy(update={"path": path})

        if value is None:
            data: dict[str, Any] = {}
        elif isinstance(value, (list, tuple)):
            data = {"arg_names": value}
        elif isinstance(value, Mapping):
            data = dict(value)
        else:
            raise ConfigurationError(
                f"Invalid endpoint configuration for `{path}`: "
                f"expected a mapping or a list, got {type(value).__name__}",
                path=path,
            )

        data["path"] = path
        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as e:
            errors = e.errors()
            if errors:
                first_error = errors[0]
                field = ".".join(str(loc) for loc in first_error.get("loc", []))
                msg = first_error.get("msg", "validation error")
                raise ConfigurationError(
                    f"Invalid endpoint configuration for `{path}`: {field} - {msg}",
                    path=path,
                ) from e
            raise ConfigurationError(
                f"Invalid endpoint configuration for `{path}`: {e}", path=path
            ) from e


class EndpointRegistry:
    """
    Mapping of canonical endpoint path to EndpointConfig.

    Writes are serialized by a lock and publish a fresh read-only snapshot,
    so lookups never take the lock. Registering a path a second time
    replaces its config; functions already bound to that path see the new
    config on their next call.

    Example:
        registry = EndpointRegistry()
        registry.register("user.login", {"required": ["email", "password"]})
        registry.get("user/login").required  # ("email", "password")
    """

    __slots__ = ("_configs", "_lock", "_on_register")

    def __init__(
        self,
        endpoints: Mapping[str, Any] | None = None,
        *,
        on_register: Callable[[str], None] | None = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            endpoints: Optional endpoint map to load immediately
            on_register: Called with each canonical path before its config is
                stored; raising from it aborts the registration
        """
        self._configs: Mapping[str, EndpointConfig] = MappingProxyType({})
        self._lock = threading.Lock()
        self._on_register = on_register
        if endpoints is not None:
            self.register_many(endpoints)

    def register(self, path: str, config: Any = None) -> EndpointConfig:
        """
        Register (or re-register) a single endpoint.

        Args:
            path: Endpoint path in dot or slash notation
            config: Endpoint map entry (see EndpointConfig.parse)

        Returns:
            The stored EndpointConfig

        Raises:
            ConfigurationError: If the path is empty, the config is invalid,
                or the namespace hook rejects the path
        """
        canonical = normalize_endpoint_path(path)
        if not canonical:
            raise ConfigurationError(f"Endpoint path cannot be empty: {path!r}", path=canonical)

        endpoint = EndpointConfig.parse(config, canonical)

        with self._lock:
            if self._on_register is not None:
                self._on_register(canonical)
            configs = dict(self._configs)
            replaced = canonical in configs
            configs[canonical] = endpoint
            self._configs = MappingProxyType(configs)

        logger.debug(
            "%s endpoint %s (methods=%s, args=%s)",
            "Updated" if replaced else "Registered",
            canonical,
            sorted(endpoint.methods) or "any",
            list(endpoint.arg_names),
        )
        return endpoint

    def register_many(self, endpoints: Mapping[str, Any]) -> None:
        """Register every entry of an endpoint map, in insertion order."""
        for path, config in endpoints.items():
            self.register(path, config)

    def get(self, path: str) -> EndpointConfig | None:
        """Look up the config for a canonical path."""
        return self._configs.get(path)

    def paths(self) -> list[str]:
        """Registered canonical paths, in registration order."""
        return list(self._configs)

    def __contains__(self, path: object) -> bool:
        return path in self._configs

    def __iter__(self) -> Iterator[str]:
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def __repr__(self) -> str:
        return f"EndpointRegistry({len(self._configs)} endpoints)"
