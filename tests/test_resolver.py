"""Tests for the cache-aside resolver."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from nexaview.entities import CacheKey
from nexaview.exceptions import FetchError, ResolveError, StoreError
from nexaview.repositories import InMemoryKeyValueStore
from nexaview.services import CacheAsideResolver


class TestResolveHitAndMiss:
    """Tests for the read-through path."""

    @pytest.mark.asyncio
    async def test_miss_fetches_and_stores(self, resolver, store) -> None:
        """Empty store: fetch once, store the JSON text with the TTL."""
        fetch = AsyncMock(return_value=172.35)

        price = await resolver.resolve(CacheKey.stock("AAPL"), 7200, fetch)

        assert price == 172.35
        fetch.assert_awaited_once()
        assert await store.get("stock:AAPL") == "172.35"
        assert store.ttl("stock:AAPL") == 7200

    @pytest.mark.asyncio
    async def test_second_call_is_a_hit(self, resolver) -> None:
        """Resolving twice returns the same payload with a single fetch."""
        fetch = AsyncMock(return_value=172.35)
        key = CacheKey.stock("AAPL")

        first = await resolver.resolve(key, 7200, fetch)
        second = await resolver.resolve(key, 7200, fetch)

        assert first == second == 172.35
        assert fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_hit_is_case_insensitive(self, resolver) -> None:
        fetch = AsyncMock(return_value={"name": "Singapore"})

        await resolver.resolve(CacheKey.weather("Singapore"), 3600, fetch)
        await resolver.resolve(CacheKey.weather("SINGAPORE"), 3600, fetch)

        assert fetch.await_count == 1

    @pytest.mark.asyncio
    async def test_expired_entry_is_refetched(self, resolver, clock) -> None:
        fetch = AsyncMock(side_effect=[{"temp": 30}, {"temp": 28}])
        key = CacheKey.weather("singapore")

        assert await resolver.resolve(key, 3600, fetch) == {"temp": 30}
        clock.advance(3599)
        assert await resolver.resolve(key, 3600, fetch) == {"temp": 30}
        clock.advance(1)
        assert await resolver.resolve(key, 3600, fetch) == {"temp": 28}
        assert fetch.await_count == 2

    @pytest.mark.asyncio
    async def test_empty_value_is_a_miss(self, resolver, store) -> None:
        await store.set("weather:singapore", "", 3600)
        fetch = AsyncMock(return_value={"temp": 30})

        assert await resolver.resolve(CacheKey.weather("singapore"), 3600, fetch) == {"temp": 30}
        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cached_null_is_a_hit(self, resolver) -> None:
        """A ticker with no data caches None rather than refetching."""
        fetch = AsyncMock(return_value=None)
        key = CacheKey.stock("ZZZZ")

        assert await resolver.resolve(key, 7200, fetch) is None
        assert await resolver.resolve(key, 7200, fetch) is None
        assert fetch.await_count == 1


class TestResolveFailures:
    """Tests for error propagation."""

    @pytest.mark.asyncio
    async def test_fetch_failure_leaves_store_unchanged(self, resolver, store) -> None:
        """No negative caching: the key stays absent after a failed fetch."""
        fetch = AsyncMock(side_effect=FetchError("weather", "Upstream returned HTTP 500"))

        with pytest.raises(ResolveError) as exc_info:
            await resolver.resolve(CacheKey.weather("singapore"), 3600, fetch)

        assert isinstance(exc_info.value.cause, FetchError)
        assert exc_info.value.key == "weather:singapore"
        assert exc_info.value.reason == "Upstream returned HTTP 500"
        assert await store.get("weather:singapore") is None

    @pytest.mark.asyncio
    async def test_unexpected_fetch_exception_becomes_fetch_error(self, resolver) -> None:
        fetch = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(ResolveError) as exc_info:
            await resolver.resolve(CacheKey.forecast("oslo"), 21600, fetch)

        cause = exc_info.value.cause
        assert isinstance(cause, FetchError)
        assert cause.domain == "forecast"
        assert cause.reason == "boom"

    @pytest.mark.asyncio
    async def test_corrupt_value_is_fatal_by_default(self, resolver, store) -> None:
        await store.set("weather:singapore", "{not json", 3600)
        fetch = AsyncMock(return_value={"temp": 30})

        with pytest.raises(ResolveError) as exc_info:
            await resolver.resolve(CacheKey.weather("singapore"), 3600, fetch)

        assert isinstance(exc_info.value.cause, StoreError)
        fetch.assert_not_awaited()
        assert await store.get("weather:singapore") == "{not json"

    @pytest.mark.asyncio
    async def test_corrupt_value_refetched_when_configured(self, store) -> None:
        resolver = CacheAsideResolver(store=store, refetch_on_corrupt=True)
        await store.set("weather:singapore", "{not json", 3600)
        fetch = AsyncMock(return_value={"temp": 30})

        assert await resolver.resolve(CacheKey.weather("singapore"), 3600, fetch) == {"temp": 30}
        assert await store.get("weather:singapore") == '{"temp": 30}'

    @pytest.mark.asyncio
    async def test_unserializable_payload_is_not_written(self, resolver, store) -> None:
        fetch = AsyncMock(return_value={"when": object()})

        with pytest.raises(ResolveError) as exc_info:
            await resolver.resolve(CacheKey.weather("singapore"), 3600, fetch)

        assert isinstance(exc_info.value.cause, StoreError)
        assert await store.get("weather:singapore") is None

    @pytest.mark.asyncio
    async def test_store_read_failure_does_not_fetch(self) -> None:
        store = AsyncMock()
        store.get.side_effect = StoreError("Redis GET failed")
        resolver = CacheAsideResolver(store=store)
        fetch = AsyncMock(return_value=1.0)

        with pytest.raises(ResolveError) as exc_info:
            await resolver.resolve(CacheKey.stock("AAPL"), 7200, fetch)

        assert isinstance(exc_info.value.cause, StoreError)
        fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_write_failure_is_raised(self) -> None:
        store = AsyncMock()
        store.get.return_value = None
        store.set.side_effect = StoreError("Redis SET failed")
        resolver = CacheAsideResolver(store=store)

        with pytest.raises(ResolveError) as exc_info:
            await resolver.resolve(CacheKey.stock("AAPL"), 7200, AsyncMock(return_value=1.0))

        assert exc_info.value.reason == "Redis SET failed"


class TestRefresh:
    """Tests for the forced re-fetch used by the sweeper."""

    @pytest.mark.asyncio
    async def test_refresh_bypasses_hit_and_resets_ttl(self, resolver, store, clock) -> None:
        key = CacheKey.news("us", "general")
        await store.set(str(key), '{"articles": []}', 21600)
        clock.advance(20000)
        fetch = AsyncMock(return_value={"articles": [{"title": "fresh"}]})

        payload = await resolver.refresh(key, 21600, fetch)

        assert payload == {"articles": [{"title": "fresh"}]}
        fetch.assert_awaited_once()
        assert store.ttl(str(key)) == 21600


class TestSingleFlight:
    """Tests for coalescing concurrent misses."""

    @pytest.mark.asyncio
    async def test_concurrent_misses_share_one_fetch(self, resolver: CacheAsideResolver) -> None:
        release = asyncio.Event()
        calls = 0

        async def fetch() -> dict:
            nonlocal calls
            calls += 1
            await release.wait()
            return {"temp": 30}

        key = CacheKey.weather("singapore")
        first = asyncio.create_task(resolver.resolve(key, 3600, fetch))
        second = asyncio.create_task(resolver.resolve(key, 3600, fetch))
        for _ in range(5):
            await asyncio.sleep(0)

        assert resolver.inflight_count == 1
        release.set()
        results = await asyncio.gather(first, second)

        assert results == [{"temp": 30}, {"temp": 30}]
        assert calls == 1
        assert resolver.inflight_count == 0

    @pytest.mark.asyncio
    async def test_shared_failure_reaches_all_waiters_and_clears(self, resolver) -> None:
        release = asyncio.Event()

        async def fetch() -> dict:
            await release.wait()
            raise FetchError("weather", "Upstream returned HTTP 502")

        key = CacheKey.weather("singapore")
        tasks = [asyncio.create_task(resolver.resolve(key, 3600, fetch)) for _ in range(3)]
        for _ in range(5):
            await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(*tasks, return_exceptions=True)

        assert all(isinstance(r, ResolveError) for r in results)
        assert resolver.inflight_count == 0

        retry = AsyncMock(return_value={"temp": 29})
        assert await resolver.resolve(key, 3600, retry) == {"temp": 29}
        retry.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_shared_fetch(self, store) -> None:
        resolver = CacheAsideResolver(store=store)
        release = asyncio.Event()

        async def fetch() -> float:
            await release.wait()
            return 172.35

        key = CacheKey.stock("AAPL")
        abandoned = asyncio.create_task(resolver.resolve(key, 7200, fetch))
        waiting = asyncio.create_task(resolver.resolve(key, 7200, fetch))
        for _ in range(5):
            await asyncio.sleep(0)

        abandoned.cancel()
        release.set()

        assert await waiting == 172.35
        assert abandoned.cancelled()
        assert await store.get("stock:AAPL") == "172.35"

    @pytest.mark.asyncio
    async def test_different_keys_fetch_independently(self) -> None:
        resolver = CacheAsideResolver(store=InMemoryKeyValueStore())
        fetch = AsyncMock(side_effect=lambda: {"ok": True})

        await asyncio.gather(
            resolver.resolve(CacheKey.weather("paris"), 3600, fetch),
            resolver.resolve(CacheKey.forecast("paris"), 3600, fetch),
        )

        assert fetch.await_count == 2
