"""HTTP handlers for the gateway endpoints.

Handlers convert between service calls and HTTP concerns: status codes,
error messages and response DTOs. Error details are rendered by the app as
``{"error": ...}`` bodies.
"""

import logging
from typing import Any

from fastapi import HTTPException, status

from nexaview.dto import HealthCheckResponse, NewsSearchQuery, SweepReportResponse
from nexaview.exceptions import FetchError, ResolveError
from nexaview.services import GatewayService, PreloadSweeper

logger = logging.getLogger(__name__)

STOCKS_ERROR = "ERROR: Failed to fetch stocks"
NEWS_SEARCH_ERROR = "Failed to fetch news"
BACKUP_DONE = "All country-category data backed up!"


class GatewayHandler:
    """HTTP handlers for the cached data domains.

    This handler delegates to GatewayService and PreloadSweeper and handles
    HTTP-specific concerns like status codes and error messages.

    Example:
        ```python
        handler = GatewayHandler(gateway_service=service, sweeper=sweeper)

        @app.get("/api/weather/{city}")
        async def weather(city: str):
            return await handler.get_weather(city)
        ```
    """

    def __init__(self, gateway_service: GatewayService, sweeper: PreloadSweeper) -> None:
        """Initialize the gateway handler.

        Args:
            gateway_service: Domain operations (required).
            sweeper: Preload sweeper behind /backup (required).
        """
        self._gateway = gateway_service
        self._sweeper = sweeper

    async def get_stocks(self) -> dict[str, float | None]:
        """Handle GET /api/stocks requests."""
        try:
            return await self._gateway.get_stock_prices()
        except ResolveError as e:
            logger.error("Stock prices failed: %s", e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=STOCKS_ERROR,
            ) from e

    async def get_weather(self, city: str) -> dict[str, Any]:
        """Handle GET /api/weather/{city} requests."""
        return await self._resolved(self._gateway.get_weather, city)

    async def get_forecast(self, city: str) -> dict[str, Any]:
        """Handle GET /api/forecast/{city} requests."""
        return await self._resolved(self._gateway.get_forecast, city)

    async def get_news(self, country: str, category: str) -> dict[str, Any]:
        """Handle GET /api/news/{country}/{category} requests."""
        return await self._resolved(self._gateway.get_news, country, category)

    async def search_news(self, query: NewsSearchQuery) -> dict[str, Any]:
        """Handle GET /api/curnews requests.

        Raises:
            HTTPException: 400 without an API key, 500 if the search fails
        """
        if not query.apikey:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing API key")

        try:
            return await self._gateway.search_news(query.term, query.apikey)
        except FetchError as e:
            logger.error("Error fetching news: %s", e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=NEWS_SEARCH_ERROR,
            ) from e

    async def backup(self) -> str:
        """Handle GET /backup requests with a plain-text confirmation."""
        report = await self._sweeper.preload_all()
        if report.ok:
            return BACKUP_DONE
        failed = ", ".join(f.key for f in report.failed)
        return (
            f"Backed up {len(report.succeeded)} of {report.total} "
            f"country-category combinations. Failed: {failed}"
        )

    async def backup_report(self) -> SweepReportResponse:
        """Handle GET /backup/report requests."""
        report = await self._sweeper.preload_all()
        return SweepReportResponse.from_report(report)

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Raises:
            HTTPException: 503 if the store is unreachable
        """
        store = self._gateway.resolver.store
        check = getattr(store, "health_check", None)
        healthy = bool(await check()) if check is not None else True
        if not healthy:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Cache store is unreachable",
            )
        return HealthCheckResponse(status="healthy", store_healthy=True)

    async def _resolved(self, operation, *params: str) -> dict[str, Any]:
        try:
            return await operation(*params)
        except ResolveError as e:
            logger.error("Resolve failed: %s", e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.reason,
            ) from e
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
