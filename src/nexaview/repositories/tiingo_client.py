"""Tiingo end-of-day price client (stock domain)."""

import logging

from .upstream_client import UpstreamClient

logger = logging.getLogger(__name__)

TIINGO_BASE_URL = "https://api.tiingo.com/tiingo/daily"


class TiingoClient(UpstreamClient):
    """Fetches the most recent closing price for a ticker."""

    domain = "stock"

    async def fetch_last_close(self, symbol: str) -> float | None:
        """Fetch the latest daily close for a ticker.

        Args:
            symbol: Ticker symbol, e.g. "AAPL"

        Returns:
            The closing price, or None if Tiingo returned no data

        Raises:
            FetchError: If the call fails or TIINGO_API_KEY is unset
        """
        token = self._require_key("TIINGO_API_KEY")
        data = await self._get_json(
            f"{TIINGO_BASE_URL}/{symbol}/prices",
            params={"token": token, "resampleFreq": "daily"},
        )

        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            logger.info("Tiingo returned no prices for %s", symbol)
            return None
        return data[0].get("close")
