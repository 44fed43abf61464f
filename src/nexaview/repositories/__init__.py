"""Repository layer for data access.

Concrete stores and upstream provider clients. Stores satisfy the
KeyValueStore protocol structurally; provider clients raise FetchError
on any failure.
"""

from nexaview.protocols import KeyValueStore

from .gnews_client import GNewsClient
from .memory_store import InMemoryKeyValueStore
from .newsapi_client import NewsApiClient
from .openweather_client import OpenWeatherClient
from .redis_store import RedisKeyValueStore
from .tiingo_client import TiingoClient
from .upstream_client import UpstreamClient

__all__ = [
    "KeyValueStore",
    "RedisKeyValueStore",
    "InMemoryKeyValueStore",
    "UpstreamClient",
    "TiingoClient",
    "OpenWeatherClient",
    "GNewsClient",
    "NewsApiClient",
]
