"""
Endpoint path normalization.

Endpoint identifiers may be written in dot notation (``user.account.login``)
or slash notation (``/user/account/login/``); both normalize to the canonical
``user/account/login`` used as the registry key.
"""

from __future__ import annotations

import string

__all__ = ["normalize_endpoint_path", "split_endpoint_path"]

# Whitespace and slashes are stripped together so the result is a fixed point
_STRIP_CHARS = string.whitespace + "/"


def normalize_endpoint_path(path: str) -> str:
    """
    Normalize an endpoint path to its canonical slash-delimited form.

    Args:
        path: Endpoint path in dot or slash notation

    Returns:
        The path with every ``.`` replaced by ``/``, surrounding whitespace
        trimmed, and all leading and trailing ``/`` removed

    Example:
        >>> normalize_endpoint_path(" /user.account/login// ")
        'user/account/login'
    """
    return path.replace(".", "/").strip(_STRIP_CHARS)


def split_endpoint_path(path: str) -> list[str]:
    """Split a canonical path into its segments."""
    if not path:
        return []
    return path.split("/")
