"""
Unit tests for ApiPromise.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from rest_do.errors import ConfigurationError
from rest_do.promise import ApiPromise


class TestApiPromise:
    """Tests for settling and awaiting."""

    def test_promise_is_awaitable(self):
        promise = ApiPromise(AsyncMock(return_value=1), "ping")
        assert hasattr(promise, "__await__")

    async def test_resolves_to_factory_result(self):
        factory = AsyncMock(return_value={"ok": True})
        promise = ApiPromise(factory, "ping")

        assert await promise == {"ok": True}
        assert promise.done

    async def test_runs_once(self):
        """Awaiting twice does not repeat the request."""
        factory = AsyncMock(return_value=1)
        promise = ApiPromise(factory, "ping")

        assert await promise == 1
        assert await promise == 1
        factory.assert_awaited_once()

    async def test_concurrent_awaits_share_one_request(self):
        started = asyncio.Event()

        async def slow():
            started.set()
            await asyncio.sleep(0)
            return "done"

        calls = []

        def factory():
            calls.append(1)
            return slow()

        promise = ApiPromise(factory, "slow")

        async def consume():
            return await promise

        results = await asyncio.gather(consume(), consume())

        assert results == ["done", "done"]
        assert len(calls) == 1

    async def test_failure_settles_once(self):
        factory = AsyncMock(side_effect=ValueError("boom"))
        promise = ApiPromise(factory, "ping")

        with pytest.raises(ValueError):
            await promise
        with pytest.raises(ValueError):
            await promise
        factory.assert_awaited_once()

    async def test_rejected(self):
        error = ConfigurationError("no such endpoint: `x`", path="x")
        promise = ApiPromise.rejected(error, "x")

        assert promise.done
        with pytest.raises(ConfigurationError) as exc_info:
            await promise
        assert exc_info.value is error

    async def test_without_factory(self):
        with pytest.raises(RuntimeError):
            await ApiPromise(None, "x")


class TestThen:
    """Tests for chained transformations."""

    async def test_then_transforms_result(self):
        promise = ApiPromise(AsyncMock(return_value=2), "n").then(lambda x: x * 10)
        assert await promise == 20

    async def test_then_awaits_async_callback(self):
        async def double(x):
            return x * 2

        promise = ApiPromise(AsyncMock(return_value=3), "n").then(double)
        assert await promise == 6

    async def test_then_chain(self):
        promise = (
            ApiPromise(AsyncMock(return_value=1), "n")
            .then(lambda x: x + 1)
            .then(lambda x: x * 3)
        )
        assert await promise == 6

    async def test_then_propagates_rejection(self):
        callback = AsyncMock()
        promise = ApiPromise.rejected(ConfigurationError("bad"), "n").then(callback)

        with pytest.raises(ConfigurationError):
            await promise
        callback.assert_not_called()


class TestRepr:
    async def test_repr_states(self):
        promise = ApiPromise(AsyncMock(return_value=1), "ping")
        assert repr(promise) == "ApiPromise(ping, pending)"

        await promise
        assert repr(promise) == "ApiPromise(ping, resolved)"

        rejected = ApiPromise.rejected(ValueError("x"), "bad")
        assert repr(rejected) == "ApiPromise(bad, rejected)"
