"""GNews top-headlines client (news domain)."""

from typing import Any

from .upstream_client import UpstreamClient

GNEWS_TOP_HEADLINES_URL = "https://gnews.io/api/v4/top-headlines"

# GNews caps a single page at 100 articles
MAX_ARTICLES = 100


class GNewsClient(UpstreamClient):
    """Fetches English top headlines filtered by country and category."""

    domain = "news"

    async def fetch_top_headlines(self, country: str, category: str) -> dict[str, Any]:
        """Fetch top headlines for a country/category pair.

        Args:
            country: Two-letter country code, e.g. "sg"
            category: GNews category, e.g. "technology"

        Returns:
            The provider's response body

        Raises:
            FetchError: If the call fails or GNEWS_API_KEY is unset
        """
        apikey = self._require_key("GNEWS_API_KEY")
        return await self._get_json(
            GNEWS_TOP_HEADLINES_URL,
            params={
                "category": category,
                "lang": "en",
                "country": country,
                "max": MAX_ARTICLES,
                "apikey": apikey,
            },
        )
