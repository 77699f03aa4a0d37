"""Endpoint map loading from JSON or YAML files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

__all__ = ["load_endpoint_map"]


def load_endpoint_map(source: str | Path | Mapping[str, Any]) -> dict[str, Any]:
    """
    Load an endpoint map of path -> endpoint config entry.

    Args:
        source: A mapping (returned as a dict), or a path to a ``.json``,
            ``.yaml`` or ``.yml`` file

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or its top
            level is not a mapping
    """
    if isinstance(source, Mapping):
        return dict(source)

    path = Path(source)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read endpoint map {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid endpoint map {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid endpoint map {path}: expected a mapping, got {type(data).__name__}"
        )
    return data
