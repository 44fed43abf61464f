"""Cache key domain entity."""

from dataclasses import dataclass
from enum import Enum


class Domain(str, Enum):
    """Category of cacheable data, each with its own key scheme and TTL."""

    STOCK = "stock"
    WEATHER = "weather"
    FORECAST = "forecast"
    NEWS = "news"


# Number of key parts and their case normalization per domain
_KEY_SCHEME: dict[Domain, tuple[int, str]] = {
    Domain.STOCK: (1, "upper"),
    Domain.WEATHER: (1, "lower"),
    Domain.FORECAST: (1, "lower"),
    Domain.NEWS: (2, "lower"),
}


@dataclass(frozen=True)
class CacheKey:
    """Key identifying one cacheable unit in the store.

    Built from a domain and its request parameters. Construction through
    the classmethods is pure and case-insensitive, so requests differing
    only in case land on the same entry.

    Attributes:
        domain: The data domain
        parts: Normalized parameters, in key order
    """

    domain: Domain
    parts: tuple[str, ...]

    @classmethod
    def build(cls, domain: Domain | str, *params: str) -> "CacheKey":
        """Derive a key for a domain from raw request parameters.

        Raises:
            ValueError: On an unknown domain, wrong arity or an empty parameter
        """
        domain = Domain(domain)
        arity, case = _KEY_SCHEME[domain]
        if len(params) != arity:
            raise ValueError(f"{domain.value} keys take {arity} parameter(s), got {len(params)}")

        parts = []
        for param in params:
            part = param.strip()
            if not part:
                raise ValueError(f"Empty {domain.value} key parameter")
            parts.append(part.upper() if case == "upper" else part.lower())
        return cls(domain=domain, parts=tuple(parts))

    @classmethod
    def stock(cls, symbol: str) -> "CacheKey":
        """Key like 'stock:AAPL'."""
        return cls.build(Domain.STOCK, symbol)

    @classmethod
    def weather(cls, city: str) -> "CacheKey":
        """Key like 'weather:singapore'."""
        return cls.build(Domain.WEATHER, city)

    @classmethod
    def forecast(cls, city: str) -> "CacheKey":
        """Key like 'forecast:singapore'."""
        return cls.build(Domain.FORECAST, city)

    @classmethod
    def news(cls, country: str, category: str) -> "CacheKey":
        """Key like 'news:us:general'."""
        return cls.build(Domain.NEWS, country, category)

    def __str__(self) -> str:
        return ":".join((self.domain.value, *self.parts))
