from typing import Annotated, Any

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nexaview import __version__
from nexaview.api.dependencies import HandlerDep, lifespan
from nexaview.config import configure_logging, settings
from nexaview.dto import ErrorResponse, HealthCheckResponse, NewsSearchQuery, SweepReportResponse


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None),
    )


def create_app(lifespan=lifespan) -> FastAPI:
    """Build the gateway application.

    Args:
        lifespan: Lifespan context manager wiring app.state.

    Returns:
        The FastAPI application
    """
    app = FastAPI(
        title="NexaView Gateway",
        description="Cached gateway for stock prices, weather, forecasts and news",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "NexaView Gateway",
            "version": __version__,
            "endpoints": {
                "stocks": "/api/stocks",
                "weather": "/api/weather/{city}",
                "forecast": "/api/forecast/{city}",
                "news": "/api/news/{country}/{category}",
                "search": "/api/curnews?term=&apikey=",
                "backup": "/backup",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/api/stocks", response_model=dict[str, float | None])
    async def stocks(handler: HandlerDep) -> dict[str, float | None]:
        """Latest close for the configured symbol set."""
        return await handler.get_stocks()

    @app.get("/api/weather/{city}")
    async def weather(city: str, handler: HandlerDep) -> dict[str, Any]:
        """Current weather for a city."""
        return await handler.get_weather(city)

    @app.get("/api/forecast/{city}")
    async def forecast(city: str, handler: HandlerDep) -> dict[str, Any]:
        """Multi-day forecast for a city."""
        return await handler.get_forecast(city)

    @app.get("/api/news/{country}/{category}")
    async def news(country: str, category: str, handler: HandlerDep) -> dict[str, Any]:
        """Top headlines for a country and category."""
        return await handler.get_news(country, category)

    @app.get("/api/curnews")
    async def curnews(
        query: Annotated[NewsSearchQuery, Query()], handler: HandlerDep
    ) -> dict[str, Any]:
        """Keyword news search using the caller's API key."""
        return await handler.search_news(query)

    @app.get("/backup", response_class=PlainTextResponse)
    async def backup(handler: HandlerDep) -> str:
        """Refresh every preload combination synchronously."""
        return await handler.backup()

    @app.get("/backup/report", response_model=SweepReportResponse)
    async def backup_report(handler: HandlerDep) -> SweepReportResponse:
        """Refresh every preload combination and report per-key outcomes."""
        return await handler.backup_report()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run(
        "nexaview.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
