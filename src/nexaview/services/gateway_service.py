"""Gateway service for the cached data domains.

Each operation derives a cache key from its parameters and resolves it
through the cache-aside resolver with the domain's policy.
"""

import asyncio
from collections.abc import Iterator, Sequence
from typing import Any

from nexaview.config import Settings, settings
from nexaview.entities import CacheKey, Domain, DomainPolicy, SweepTarget
from nexaview.protocols import KeyValueStore
from nexaview.repositories import GNewsClient, NewsApiClient, OpenWeatherClient, TiingoClient

from .policy import build_policies, news_key_space, target_for
from .resolver import CacheAsideResolver


class GatewayService:
    """Domain operations over the cache-aside resolver.

    This service depends on the KeyValueStore protocol through its resolver
    and on a policy table, so tests can hand it an in-memory store and fake
    upstream calls.

    Example:
        ```python
        service = GatewayService.create(store=RedisKeyValueStore.create())
        weather = await service.get_weather("Singapore")
        ```
    """

    def __init__(
        self,
        resolver: CacheAsideResolver,
        policies: dict[Domain, DomainPolicy],
        news_search: NewsApiClient,
        stock_symbols: Sequence[str] | None = None,
        preload_countries: Sequence[str] | None = None,
        preload_categories: Sequence[str] | None = None,
    ) -> None:
        """Initialize the gateway service.

        Args:
            resolver: Cache-aside resolver (required).
            policies: Fetch and TTL per domain (required).
            news_search: Keyword search client, never cached (required).
            stock_symbols: Symbols served by get_stock_prices. Defaults to settings.
            preload_countries: Country codes of the preload sweep. Defaults to settings.
            preload_categories: Categories of the preload sweep. Defaults to settings.
        """
        self._resolver = resolver
        self._policies = policies
        self._news_search = news_search
        self._stock_symbols = tuple(stock_symbols or settings.stock_symbols)
        self._preload_countries = tuple(preload_countries or settings.preload_countries)
        self._preload_categories = tuple(preload_categories or settings.preload_categories)
        self._closables: list[Any] = []

    @classmethod
    def create(cls, store: KeyValueStore, config: Settings | None = None) -> "GatewayService":
        """Factory method wiring the provider clients from settings.

        Args:
            store: Backing key-value store (required).
            config: Settings to use. If None, uses the global settings.

        Returns:
            Configured GatewayService
        """
        config = config or settings
        tiingo = TiingoClient(api_key=config.tiingo_api_key, timeout=config.http_timeout)
        openweather = OpenWeatherClient(api_key=config.weather_api_key, timeout=config.http_timeout)
        gnews = GNewsClient(api_key=config.gnews_api_key, timeout=config.http_timeout)
        news_search = NewsApiClient(timeout=config.http_timeout)

        service = cls(
            resolver=CacheAsideResolver(store, refetch_on_corrupt=config.refetch_on_corrupt),
            policies=build_policies(config, tiingo, openweather, gnews),
            news_search=news_search,
            stock_symbols=config.stock_symbols,
            preload_countries=config.preload_countries,
            preload_categories=config.preload_categories,
        )
        service._closables = [tiingo, openweather, gnews, news_search]
        return service

    async def _resolve(self, domain: Domain, *params: str) -> Any:
        target = target_for(self._policies[domain], *params)
        return await self._resolver.resolve(target.key, target.ttl_seconds, target.fetch)

    async def get_stock_price(self, symbol: str) -> float | None:
        """Latest close for one ticker (2h cache by default)."""
        return await self._resolve(Domain.STOCK, symbol)

    async def get_stock_prices(self, symbols: Sequence[str] | None = None) -> dict[str, float | None]:
        """Latest close for each ticker, resolved concurrently.

        Returns:
            Mapping of upper-cased symbol to price

        Raises:
            ResolveError: If any symbol fails to resolve
        """
        normalized = [CacheKey.stock(s).parts[0] for s in (symbols or self._stock_symbols)]
        prices = await asyncio.gather(*(self.get_stock_price(s) for s in normalized))
        return dict(zip(normalized, prices))

    async def get_weather(self, city: str) -> dict[str, Any]:
        """Current weather for a city (1h cache by default)."""
        return await self._resolve(Domain.WEATHER, city)

    async def get_forecast(self, city: str) -> dict[str, Any]:
        """Multi-day forecast for a city."""
        return await self._resolve(Domain.FORECAST, city)

    async def get_news(self, country: str, category: str) -> dict[str, Any]:
        """Top headlines for a country/category pair (6h cache by default)."""
        return await self._resolve(Domain.NEWS, country, category)

    async def search_news(self, term: str, api_key: str) -> dict[str, Any]:
        """Keyword news search with the caller's credential. Not cached.

        Raises:
            FetchError: If the key is missing or the call fails
        """
        return await self._news_search.search(term, api_key)

    def preload_key_space(self) -> Iterator[SweepTarget]:
        """Every news country/category combination of the preload sweep."""
        return news_key_space(self._policies, self._preload_countries, self._preload_categories)

    async def close(self) -> None:
        """Close the provider clients created by ``create``."""
        for client in self._closables:
            await client.close()

    @property
    def resolver(self) -> CacheAsideResolver:
        """Get the underlying resolver (for testing)."""
        return self._resolver

    @property
    def stock_symbols(self) -> tuple[str, ...]:
        return self._stock_symbols
