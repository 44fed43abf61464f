"""Cache-aside resolver.

Read-through "get or fetch and store" over a KeyValueStore. Payloads are
stored as JSON text. Per call: one store read, then on a miss one upstream
call and one store write, in that order.
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from nexaview.entities import CacheKey
from nexaview.exceptions import FetchError, ResolveError, StoreError
from nexaview.protocols import KeyValueStore

logger = logging.getLogger(__name__)

Fetch = Callable[[], Awaitable[Any]]


class CacheAsideResolver:
    """Resolves cache keys against a store, falling back to an upstream fetch.

    Contract:
    - A non-empty stored value is a hit and is returned without fetching.
    - A corrupt stored value fails the call with a StoreError cause, unless
      ``refetch_on_corrupt`` is set, in which case it is treated as a miss
      and overwritten.
    - A failed fetch is raised with a FetchError cause and nothing is stored.
    - A successful fetch is stored with the given TTL, overwriting any value.
    - Every failure is raised as ResolveError; nothing is retried.

    Concurrent misses for the same key within this process share a single
    upstream call. The shared call is shielded, so one caller going away does
    not cancel it for the others.

    Example:
        ```python
        resolver = CacheAsideResolver(store=RedisKeyValueStore.create())
        price = await resolver.resolve(
            CacheKey.stock("aapl"), 7200, lambda: tiingo.fetch_last_close("AAPL")
        )
        ```
    """

    def __init__(self, store: KeyValueStore, refetch_on_corrupt: bool = False) -> None:
        """Initialize the resolver.

        Args:
            store: Backing key-value store (required).
            refetch_on_corrupt: Treat undecodable cached values as misses.
        """
        self._store = store
        self._refetch_on_corrupt = refetch_on_corrupt
        self._inflight: dict[str, asyncio.Future[Any]] = {}

    async def resolve(self, key: CacheKey, ttl_seconds: int, fetch: Fetch) -> Any:
        """Return the cached payload for a key, fetching and storing it on a miss.

        Args:
            key: Cache key to resolve
            ttl_seconds: Expiry for a freshly stored payload
            fetch: Async upstream call producing the payload

        Returns:
            The cached or freshly fetched payload

        Raises:
            ResolveError: Wrapping the FetchError or StoreError that occurred
        """
        name = str(key)
        try:
            cached = await self._store.get(name)
        except StoreError as e:
            raise ResolveError(name, e) from e

        if cached:
            try:
                payload = json.loads(cached)
            except ValueError as e:
                if not self._refetch_on_corrupt:
                    error = StoreError(f"Corrupt cached value under {name}")
                    raise ResolveError(name, error) from e
                logger.warning("Corrupt cached value under %s, re-fetching", name)
            else:
                logger.debug("Cache hit: %s", name)
                return payload

        logger.debug("Cache miss: %s", name)
        return await self._load(key, ttl_seconds, fetch)

    async def refresh(self, key: CacheKey, ttl_seconds: int, fetch: Fetch) -> Any:
        """Fetch and store a payload without reading the cache first.

        Always re-fetches and re-stores, which also resets the TTL.

        Raises:
            ResolveError: Wrapping the FetchError or StoreError that occurred
        """
        return await self._load(key, ttl_seconds, fetch)

    async def _load(self, key: CacheKey, ttl_seconds: int, fetch: Fetch) -> Any:
        name = str(key)
        pending = self._inflight.get(name)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_and_store(key, ttl_seconds, fetch))
            self._inflight[name] = pending
            pending.add_done_callback(lambda done: self._forget(name, done))
        else:
            logger.debug("Joining in-flight fetch: %s", name)
        return await asyncio.shield(pending)

    def _forget(self, name: str, done: "asyncio.Future[Any]") -> None:
        if self._inflight.get(name) is done:
            del self._inflight[name]
        # Mark the exception as retrieved
        if not done.cancelled():
            done.exception()

    async def _fetch_and_store(self, key: CacheKey, ttl_seconds: int, fetch: Fetch) -> Any:
        name = str(key)
        try:
            payload = await fetch()
        except FetchError as e:
            raise ResolveError(name, e) from e
        except Exception as e:
            error = FetchError(key.domain.value, str(e) or type(e).__name__)
            raise ResolveError(name, error) from e

        try:
            value = json.dumps(payload)
        except (TypeError, ValueError) as e:
            error = StoreError(f"Payload for {name} is not JSON serializable: {e}")
            raise ResolveError(name, error) from e

        try:
            await self._store.set(name, value, ttl_seconds)
        except StoreError as e:
            raise ResolveError(name, e) from e

        logger.info("Stored %s (ttl=%ss)", name, ttl_seconds)
        return payload

    @property
    def inflight_count(self) -> int:
        """Number of upstream fetches currently in flight."""
        return len(self._inflight)

    @property
    def store(self) -> KeyValueStore:
        """Get the underlying store (for testing)."""
        return self._store
