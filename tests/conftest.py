"""Shared pytest fixtures for gateway tests."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from nexaview.entities import Domain, DomainPolicy
from nexaview.repositories import InMemoryKeyValueStore, NewsApiClient
from nexaview.services import CacheAsideResolver, GatewayService

STOCK_SYMBOLS = ["AAPL", "TSLA", "MSFT", "GOOGL", "NVDA"]
STOCK_PRICES = {"AAPL": 172.35, "TSLA": 248.5, "MSFT": 415.1, "GOOGL": 141.8, "NVDA": 880.0}
PRELOAD_COUNTRIES = ["us", "sg", "in"]
PRELOAD_CATEGORIES = ["general", "nation", "business", "technology", "entertainment"]


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryKeyValueStore:
    """In-memory store driven by the fake clock."""
    return InMemoryKeyValueStore(clock=clock)


@pytest.fixture
def resolver(store: InMemoryKeyValueStore) -> CacheAsideResolver:
    return CacheAsideResolver(store=store)


@pytest.fixture
def upstream() -> SimpleNamespace:
    """Upstream calls returning canned payloads, one AsyncMock per domain."""
    return SimpleNamespace(
        stock=AsyncMock(side_effect=lambda symbol: STOCK_PRICES.get(symbol)),
        weather=AsyncMock(side_effect=lambda city: {"name": city, "main": {"temp": 31.0}}),
        forecast=AsyncMock(side_effect=lambda city: {"city": {"name": city}, "cnt": 40}),
        news=AsyncMock(
            side_effect=lambda country, category: {
                "totalArticles": 1,
                "articles": [{"title": f"{country}-{category}"}],
            }
        ),
    )


@pytest.fixture
def policies(upstream: SimpleNamespace) -> dict[Domain, DomainPolicy]:
    return {
        Domain.STOCK: DomainPolicy(Domain.STOCK, 7200, upstream.stock),
        Domain.WEATHER: DomainPolicy(Domain.WEATHER, 3600, upstream.weather),
        Domain.FORECAST: DomainPolicy(Domain.FORECAST, 21600, upstream.forecast),
        Domain.NEWS: DomainPolicy(Domain.NEWS, 21600, upstream.news),
    }


@pytest.fixture
def news_search() -> AsyncMock:
    """Keyword search client stub."""
    client = AsyncMock(spec=NewsApiClient)
    client.search.return_value = {"status": "ok", "totalResults": 0, "articles": []}
    return client


@pytest.fixture
def gateway(
    resolver: CacheAsideResolver,
    policies: dict[Domain, DomainPolicy],
    news_search: AsyncMock,
) -> GatewayService:
    return GatewayService(
        resolver=resolver,
        policies=policies,
        news_search=news_search,
        stock_symbols=STOCK_SYMBOLS,
        preload_countries=PRELOAD_COUNTRIES,
        preload_categories=PRELOAD_CATEGORIES,
    )
