"""NewsAPI keyword search client.

Unlike the other providers, the credential comes from the caller on every
request, so results are never cached.
"""

from typing import Any

from nexaview.exceptions import FetchError

from .upstream_client import UpstreamClient

NEWSAPI_EVERYTHING_URL = "https://newsapi.org/v2/everything"


class NewsApiClient(UpstreamClient):
    """Searches all articles matching a keyword."""

    domain = "curnews"

    async def search(self, term: str, api_key: str) -> dict[str, Any]:
        """Search English articles for a term.

        Args:
            term: Search keyword
            api_key: Caller-supplied NewsAPI key

        Returns:
            The provider's response body

        Raises:
            FetchError: If the key is empty or the call fails
        """
        if not api_key:
            raise FetchError(self.domain, "Missing API key")
        return await self._get_json(
            NEWSAPI_EVERYTHING_URL,
            params={"q": term, "apiKey": api_key, "language": "en"},
        )
