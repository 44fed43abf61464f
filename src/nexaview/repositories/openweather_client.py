"""OpenWeather client (weather and forecast domains)."""

from typing import Any

from .upstream_client import UpstreamClient

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"


class OpenWeatherClient(UpstreamClient):
    """Fetches current conditions and 5-day forecasts by city name.

    Both payloads are the provider's response body, passed through unmodified.
    """

    domain = "weather"

    async def fetch_current(self, city: str) -> dict[str, Any]:
        """Fetch current weather for a city in metric units."""
        return await self._fetch("weather", city, domain="weather")

    async def fetch_forecast(self, city: str) -> dict[str, Any]:
        """Fetch the multi-day forecast for a city in metric units."""
        return await self._fetch("forecast", city, domain="forecast")

    async def _fetch(self, endpoint: str, city: str, domain: str) -> dict[str, Any]:
        appid = self._require_key("WEATHER_API", domain=domain)
        return await self._get_json(
            f"{OPENWEATHER_BASE_URL}/{endpoint}",
            params={"q": city, "units": "metric", "appid": appid},
            domain=domain,
        )
