"""
NamespaceNode - attribute tree mirroring registered endpoint paths.

Registering ``user/account/login`` makes the endpoint reachable as
``api.user.account.login(...)``. Every node is a trie entry with children
and a bound dispatch function. Registered paths are endpoints; the
intermediate nodes between them are containers whose dispatch function is
bound to their own prefix path, so calling one reports the unknown endpoint
the same way any other failed call does.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from .errors import ConfigurationError
from .paths import normalize_endpoint_path, split_endpoint_path

__all__ = ["NamespaceNode", "register_namespace"]


class NamespaceNode:
    """
    One node of the endpoint namespace tree.

    Attribute access resolves child segments; item access does the same for
    segments that are not valid Python identifiers, and also accepts a full
    dot or slash path. Segments named like node attributes (``path``,
    ``children``, ``is_endpoint``) are only reachable by item access.

    Example:
        api.user.login(email="a@b.com", password="secret")
        api["user-info"]()
        api["user/login"] is api.user.login  # True
    """

    __slots__ = ("_path", "_children", "_dispatch", "_endpoint")

    def __init__(
        self,
        path: str = "",
        dispatch: Callable[..., Any] | None = None,
        *,
        endpoint: bool = False,
    ) -> None:
        object.__setattr__(self, "_path", path)
        object.__setattr__(self, "_children", {})
        object.__setattr__(self, "_dispatch", dispatch)
        object.__setattr__(self, "_endpoint", endpoint)

    @property
    def path(self) -> str:
        """Canonical path of this node ("" for the root)."""
        return self._path

    @property
    def is_endpoint(self) -> bool:
        """Whether this node is a registered endpoint."""
        return self._endpoint

    def children(self) -> dict[str, NamespaceNode]:
        """A copy of the direct children, keyed by segment name."""
        return dict(self._children)

    def __getattr__(self, name: str) -> NamespaceNode:
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' has no attribute '{name}'")

        child = self._children.get(name)
        if child is None:
            where = self._path or "<root>"
            raise AttributeError(f"No endpoint or namespace '{name}' under {where}")
        return child

    def __getitem__(self, key: str) -> NamespaceNode:
        node = self
        for segment in split_endpoint_path(normalize_endpoint_path(key)):
            child = node._children.get(segment)
            if child is None:
                raise KeyError(key)
            node = child
        return node

    def __contains__(self, name: object) -> bool:
        return name in self._children

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __dir__(self) -> list[str]:
        return sorted(set(object.__dir__(self)) | set(self._children))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """
        Invoke the dispatch function bound to this node.

        Containers dispatch their own prefix path, which is not registered,
        so the call settles as a rejected promise.

        Raises:
            TypeError: If this node is the root, which has no path to dispatch
        """
        if self._dispatch is None:
            raise TypeError("The namespace root is not callable")
        return self._dispatch(*args, **kwargs)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(
            f"Cannot set attribute '{name}' on NamespaceNode. "
            "Register endpoints through the client instead."
        )

    def __repr__(self) -> str:
        kind = "endpoint" if self.is_endpoint else "namespace"
        return f"NamespaceNode({self._path or '<root>'}, {kind})"


def register_namespace(
    root: NamespaceNode,
    path: str,
    leaf_factory: Callable[[str], Callable[..., Any]],
) -> NamespaceNode:
    """
    Ensure a node chain exists for ``path`` and bind an endpoint at its end.

    Existing intermediate nodes are reused; new ones are bound to
    ``leaf_factory`` for their own prefix path. Re-registering an existing
    endpoint is a no-op that returns the already bound node. The whole path
    is validated before any node is created, so a rejected path leaves the
    tree untouched.

    Args:
        root: Root of the namespace tree
        path: Canonical endpoint path
        leaf_factory: Builds the dispatch function for the canonical path

    Returns:
        The endpoint node for ``path``

    Raises:
        ConfigurationError: If the path is empty or has empty segments, if a
            prefix of the path is already an endpoint, or if the path itself
            is already a namespace hosting other endpoints
    """
    segments = split_endpoint_path(path)
    if not segments or any(not segment for segment in segments):
        raise ConfigurationError(f"Invalid endpoint path: `{path}`", path=path)

    # Validation pass
    node: NamespaceNode | None = root
    for depth, segment in enumerate(segments):
        node = node._children.get(segment)
        if node is None:
            break
        if node.is_endpoint and depth < len(segments) - 1:
            raise ConfigurationError(
                f"Cannot register `{path}`: `{node.path}` is already an endpoint",
                path=path,
            )
    else:
        if node.is_endpoint:
            return node
        raise ConfigurationError(
            f"Cannot register `{path}`: it is already a namespace for "
            + ", ".join(f"`{path}/{name}`" for name in node._children),
            path=path,
        )

    # Build pass
    node = root
    for depth, segment in enumerate(segments):
        child = node._children.get(segment)
        if child is None:
            prefix = "/".join(segments[: depth + 1])
            child = NamespaceNode(prefix, leaf_factory(prefix))
            node._children[segment] = child
        node = child

    object.__setattr__(node, "_endpoint", True)
    return node
