"""
ApiPromise - Awaitable pending result of an endpoint call.

Calling an endpoint returns an ApiPromise immediately; the HTTP request runs
when the promise is first awaited and its outcome is settled exactly once.
Failures detected before any request is made are carried by a rejected
promise, so every call site handles errors the same way: by awaiting.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import (
    Any,
    Awaitable,
    Callable,
    Generator,
    Generic,
    TypeVar,
)

T = TypeVar("T")
U = TypeVar("U")

__all__ = ["ApiPromise"]


class ApiPromise(Awaitable[T], Generic[T]):
    """
    Awaitable result of an endpoint call.

    Example:
        # Await directly
        response = await client.api.user.login(email="a@b.com", password="x")

        # Issue several calls, then await them together
        pending = [client.api.ping() for _ in range(3)]
        responses = await asyncio.gather(*pending)

        # Attach a transformation
        data = await client.api.user.info(42).then(lambda r: r.json())
    """

    __slots__ = (
        "_label",
        "_factory",
        "_task",
        "_result",
        "_error",
        "_resolved",
        "_source",
        "_then_fn",
    )

    def __init__(
        self,
        factory: Callable[[], Awaitable[T]] | None,
        label: str = "",
        *,
        error: BaseException | None = None,
        source: ApiPromise[Any] | None = None,
        then_fn: Callable[[Any], Any] | None = None,
    ) -> None:
        """
        Initialize an ApiPromise.

        Args:
            factory: Zero-argument callable producing the awaitable to run
            label: Description used in repr (usually the endpoint path)
            error: Pre-settled failure; the promise is rejected from the start
            source: Promise whose result feeds then_fn
            then_fn: Transformation applied to the source result
        """
        self._label = label
        self._factory = factory
        self._task: asyncio.Future[T] | None = None
        self._result: T | None = None
        self._error: BaseException | None = error
        self._resolved = error is not None
        self._source = source
        self._then_fn = then_fn

    @classmethod
    def rejected(cls, error: BaseException, label: str = "") -> ApiPromise[Any]:
        """Create a promise already settled with a failure."""
        return cls(None, label, error=error)

    @property
    def label(self) -> str:
        return self._label

    @property
    def done(self) -> bool:
        """Whether the promise has settled."""
        return self._resolved

    def then(self, fn: Callable[[T], U | Awaitable[U]]) -> ApiPromise[U]:
        """
        Chain a transformation onto the result.

        The returned promise awaits this one, applies ``fn`` to the result and,
        if ``fn`` returns an awaitable, awaits that too. A failure of this
        promise propagates unchanged.
        """
        return ApiPromise(None, self._label, source=self, then_fn=fn)

    def __await__(self) -> Generator[Any, None, T]:
        """Make the promise awaitable."""
        return self._resolve().__await__()

    async def _resolve(self) -> T:
        if self._resolved:
            if self._error is not None:
                raise self._error
            return self._result  # type: ignore

        if self._task is None:
            self._task = asyncio.ensure_future(self._execute())

        try:
            self._result = await self._task
        except Exception as e:
            self._error = e
            self._resolved = True
            raise
        self._resolved = True
        return self._result  # type: ignore

    async def _execute(self) -> T:
        if self._source is not None and self._then_fn is not None:
            source_result = await self._source
            result = self._then_fn(source_result)
            if inspect.isawaitable(result):
                result = await result
            return result

        if self._factory is None:
            raise RuntimeError("Cannot resolve promise without a request")

        return await self._factory()

    def __repr__(self) -> str:
        if not self._resolved:
            status = "pending"
        elif self._error is not None:
            status = "rejected"
        else:
            status = "resolved"
        return f"ApiPromise({self._label or '<anonymous>'}, {status})"
