"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from nexaview.config import settings
from nexaview.handlers import GatewayHandler
from nexaview.repositories import RedisKeyValueStore
from nexaview.services import GatewayService, PreloadSweeper

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> GatewayHandler:
    """Dependency injection for GatewayHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "gateway_handler", None)
    if handler is None:
        raise RuntimeError("GatewayHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Store (data access) - one shared Redis connection pool
    2. Service (domain operations) - app.state.gateway_service
    3. Sweeper (preload) - app.state.sweeper
    4. Handler (HTTP endpoints) - app.state.gateway_handler

    Cleanup:
        Closes upstream clients and the Redis pool, then removes all
        services from app.state
    """
    store = RedisKeyValueStore.create()
    if await store.health_check():
        logger.info("Redis is connected (%s)", settings.redis_url)
    else:
        logger.error("Redis connection failed, requests will fail until it is reachable")

    gateway_service = GatewayService.create(store=store)
    sweeper = PreloadSweeper(
        resolver=gateway_service.resolver,
        key_space=gateway_service.preload_key_space,
        concurrency=settings.sweep_concurrency,
    )

    app.state.store = store
    app.state.gateway_service = gateway_service
    app.state.sweeper = sweeper
    app.state.gateway_handler = GatewayHandler(gateway_service=gateway_service, sweeper=sweeper)
    logger.info(
        "Gateway initialized (ttl stock=%ss weather=%ss forecast=%ss news=%ss)",
        settings.ttl_stock,
        settings.ttl_weather,
        settings.ttl_forecast,
        settings.ttl_news,
    )

    yield

    await gateway_service.close()
    await store.close()
    del app.state.gateway_handler
    del app.state.sweeper
    del app.state.gateway_service
    del app.state.store
    logger.info("Gateway shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[GatewayHandler, Depends(get_handler)]
