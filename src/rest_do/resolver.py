"""
Argument resolution - maps a call site's arguments onto one HTTP request.

The rules, applied against the endpoint's EndpointConfig:

+ No arguments: GET, unless the endpoint declares methods without GET.
+ Keyword arguments only, or a single mapping / pydantic model: the values
  form the parameter object, checked against ``required``, sent as POST.
- Anything else is a named-argument call: positional values are bound to
  ``arg_names`` in order and sent as POST. Extra positional values are
  dropped; missing trailing ones are sent as None.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import ConfigurationError, MethodNotSupportedError, ValidationError
from .registry import EndpointConfig

__all__ = ["ArgumentShape", "ResolvedRequest", "classify_arguments", "resolve_request"]


class ArgumentShape(str, Enum):
    """How a call site's arguments are interpreted."""
    NONE = "none"
    STRUCTURED_OBJECT = "structured_object"
    POSITIONAL = "positional"


@dataclass(frozen=True)
class ResolvedRequest:
    """A request ready to hand to the transport."""
    method: str
    path: str
    payload: dict[str, Any] | None = None


def classify_arguments(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> ArgumentShape:
    """
    Decide the argument shape of a call.

    Only mappings and pydantic models count as structured objects; lists,
    tuples, None and scalars are positional values.
    """
    if not args:
        return ArgumentShape.STRUCTURED_OBJECT if kwargs else ArgumentShape.NONE
    if len(args) == 1 and not kwargs and isinstance(args[0], (Mapping, BaseModel)):
        return ArgumentShape.STRUCTURED_OBJECT
    return ArgumentShape.POSITIONAL


def _parameter_object(args: tuple[Any, ...], kwargs: Mapping[str, Any]) -> dict[str, Any]:
    if not args:
        return dict(kwargs)
    value = args[0]
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    return dict(value)


def resolve_request(
    path: str,
    config: EndpointConfig | None,
    args: tuple[Any, ...] = (),
    kwargs: Mapping[str, Any] | None = None,
) -> ResolvedRequest:
    """
    Resolve call arguments into a request for ``path``.

    Args:
        path: Canonical endpoint path
        config: Registered config, or None if the path is unknown
        args: Positional call arguments
        kwargs: Keyword call arguments

    Returns:
        The request to send

    Raises:
        ConfigurationError: Unknown endpoint, or a positional call against an
            endpoint without argument names
        ValidationError: A required field is missing from the parameter object,
            or a keyword duplicates a positionally bound name
        MethodNotSupportedError: Zero-argument call on an endpoint without GET
    """
    kwargs = kwargs or {}
    shape = classify_arguments(args, kwargs)

    if shape is ArgumentShape.POSITIONAL:
        if config is None or not config.arg_names:
            raise ConfigurationError(
                f"missing endpoint named parameters configuration for: `{path}`",
                path=path,
            )
        return ResolvedRequest("POST", path, _bind_positional(path, config, args, kwargs))

    if config is None:
        raise ConfigurationError(f"no such endpoint: `{path}`", path=path)

    if shape is ArgumentShape.NONE:
        if not config.allows("GET"):
            raise MethodNotSupportedError(
                f"method not supported for endpoint: `{path}` does not support GET",
                path=path,
                method="GET",
            )
        return ResolvedRequest("GET", path)

    payload = _parameter_object(args, kwargs)
    for name in config.required:
        if name not in payload:
            raise ValidationError(
                f"missing endpoint parameter: `{name}`", path=path, field=name
            )
    return ResolvedRequest("POST", path, payload)


def _bind_positional(
    path: str,
    config: EndpointConfig,
    args: tuple[Any, ...],
    kwargs: Mapping[str, Any],
) -> dict[str, Any]:
    bound = len(args)
    payload = {
        name: args[index] if index < bound else None
        for index, name in enumerate(config.arg_names)
    }
    for name, value in kwargs.items():
        if name in config.arg_names[:bound]:
            raise ValidationError(
                f"multiple values for endpoint parameter: `{name}`", path=path, field=name
            )
        payload[name] = value
    return payload
