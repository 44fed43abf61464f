"""NexaView Gateway - cached access to market, weather and news data.

This package provides a layered architecture around a cache-aside core:

Layers:
    - protocols: Interface contracts (KeyValueStore)
    - repositories: Stores and upstream provider clients
    - services: Cache-aside resolver, preload sweeper, domain operations
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from nexaview.repositories import RedisKeyValueStore
    from nexaview.services import GatewayService

    service = GatewayService.create(store=RedisKeyValueStore.create())
    prices = await service.get_stock_prices()
    ```

For HTTP API:
    ```python
    from nexaview.api.app import app
    ```
"""

__version__ = "0.1.0"

from nexaview.config import get_redis_client, settings  # noqa: E402
from nexaview.entities import CacheKey, Domain, DomainPolicy, SweepReport  # noqa: E402
from nexaview.exceptions import FetchError, ResolveError, StoreError  # noqa: E402
from nexaview.handlers import GatewayHandler  # noqa: E402
from nexaview.protocols import KeyValueStore  # noqa: E402
from nexaview.repositories import InMemoryKeyValueStore, RedisKeyValueStore  # noqa: E402
from nexaview.services import CacheAsideResolver, GatewayService, PreloadSweeper  # noqa: E402

__all__ = [
    "__version__",
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "KeyValueStore",
    # Services (business logic)
    "CacheAsideResolver",
    "GatewayService",
    "PreloadSweeper",
    # Handlers (HTTP)
    "GatewayHandler",
    # Repositories (data access)
    "RedisKeyValueStore",
    "InMemoryKeyValueStore",
    # Entities (domain models)
    "CacheKey",
    "Domain",
    "DomainPolicy",
    "SweepReport",
    # Errors
    "FetchError",
    "StoreError",
    "ResolveError",
]
