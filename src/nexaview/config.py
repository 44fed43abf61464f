import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv(os.getenv("ENV_FILE", "config.env"))
load_dotenv()

# Two snapshots of the forecast endpoint disagreed (6h vs 1h); 6h is the chosen value.
FORECAST_TTL_SECONDS = 6 * 60 * 60


def _csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_socket_timeout: float = float(os.getenv("REDIS_SOCKET_TIMEOUT", "5.0"))

    # Upstream credentials - never log these
    tiingo_api_key: str | None = os.getenv("TIINGO_API_KEY")
    weather_api_key: str | None = os.getenv("WEATHER_API")
    gnews_api_key: str | None = os.getenv("GNEWS_API_KEY")
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "10.0"))

    # Cache TTLs (seconds)
    ttl_stock: int = int(os.getenv("CACHE_TTL_STOCK", "7200"))  # 2 hours
    ttl_weather: int = int(os.getenv("CACHE_TTL_WEATHER", "3600"))  # 1 hour
    ttl_forecast: int = int(os.getenv("CACHE_TTL_FORECAST", str(FORECAST_TTL_SECONDS)))
    ttl_news: int = int(os.getenv("CACHE_TTL_NEWS", "21600"))  # 6 hours
    refetch_on_corrupt: bool = os.getenv("CACHE_REFETCH_ON_CORRUPT", "false").lower() == "true"

    # Domain data
    stock_symbols: tuple[str, ...] = _csv(os.getenv("STOCK_SYMBOLS", "AAPL,TSLA,MSFT,GOOGL,NVDA"))
    preload_countries: tuple[str, ...] = _csv(os.getenv("PRELOAD_COUNTRIES", "us,sg,in"))
    preload_categories: tuple[str, ...] = _csv(
        os.getenv("PRELOAD_CATEGORIES", "general,nation,business,technology,entertainment")
    )
    sweep_concurrency: int = int(os.getenv("SWEEP_CONCURRENCY", "1"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "5000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        for name in ("ttl_stock", "ttl_weather", "ttl_forecast", "ttl_news"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be a positive number of seconds")

        if self.sweep_concurrency < 1:
            raise ValueError("SWEEP_CONCURRENCY must be at least 1")

        if self.log_level.upper() not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {self.log_level!r}")

    def __repr__(self) -> str:
        """Repr that masks credential values."""
        fields = []
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if name.endswith("_api_key") or name == "redis_password":
                value = "**********" if value else None
            fields.append(f"{name}={value!r}")
        return f"Settings({', '.join(fields)})"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        socket_timeout=settings.redis_socket_timeout,
        decode_responses=True,
    )


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging for the gateway."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Suppress httpx request logs, they carry provider credentials in query strings
    logging.getLogger("httpx").setLevel(logging.WARNING)
