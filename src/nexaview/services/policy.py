"""Per-domain key and expiry policy table."""

from collections.abc import Iterator, Mapping, Sequence

from nexaview.config import Settings
from nexaview.entities import CacheKey, Domain, DomainPolicy, SweepTarget
from nexaview.repositories import GNewsClient, OpenWeatherClient, TiingoClient


def build_policies(
    settings: Settings,
    tiingo: TiingoClient,
    openweather: OpenWeatherClient,
    gnews: GNewsClient,
) -> dict[Domain, DomainPolicy]:
    """Map every domain to its upstream call and TTL.

    Args:
        settings: Source of the per-domain TTLs
        tiingo: Quote provider
        openweather: Weather and forecast provider
        gnews: Headlines provider

    Returns:
        Policy per domain
    """
    return {
        Domain.STOCK: DomainPolicy(Domain.STOCK, settings.ttl_stock, tiingo.fetch_last_close),
        Domain.WEATHER: DomainPolicy(
            Domain.WEATHER, settings.ttl_weather, openweather.fetch_current
        ),
        Domain.FORECAST: DomainPolicy(
            Domain.FORECAST, settings.ttl_forecast, openweather.fetch_forecast
        ),
        Domain.NEWS: DomainPolicy(Domain.NEWS, settings.ttl_news, gnews.fetch_top_headlines),
    }


def target_for(policy: DomainPolicy, *params: str) -> SweepTarget:
    """Bind a policy to concrete parameters."""
    key = CacheKey.build(policy.domain, *params)
    return SweepTarget(key=key, ttl_seconds=policy.ttl_seconds, fetch=lambda: policy.fetch(*key.parts))


def news_key_space(
    policies: Mapping[Domain, DomainPolicy],
    countries: Sequence[str],
    categories: Sequence[str],
) -> Iterator[SweepTarget]:
    """Enumerate the news preload key space, countries outer, categories inner."""
    policy = policies[Domain.NEWS]
    for country in countries:
        for category in categories:
            yield target_for(policy, country, category)
