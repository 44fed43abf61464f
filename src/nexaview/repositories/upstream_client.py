"""Shared HTTP plumbing for upstream data providers.

Every provider client performs a single GET per call and returns decoded
JSON. Transport errors, timeouts and non-2xx statuses all surface as
FetchError; there is no retry, backoff or circuit breaking.
"""

import logging
from typing import Any

import httpx

from nexaview.config import settings
from nexaview.exceptions import FetchError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """Base class for provider clients built on httpx.AsyncClient.

    Subclasses set ``domain`` for error attribution and call ``_get_json``.
    """

    domain: str = "upstream"

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Server-held provider credential.
            timeout: Request timeout in seconds. Defaults to settings.http_timeout.
            client: Shared httpx client. If None, one is created lazily.
        """
        self._api_key = api_key
        self._timeout = timeout or settings.http_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    def _require_key(self, setting_name: str, domain: str | None = None) -> str:
        if not self._api_key:
            raise FetchError(domain or self.domain, f"{setting_name} is not configured")
        return self._api_key

    async def _get_json(self, url: str, params: dict[str, Any], domain: str | None = None) -> Any:
        """GET a URL and decode its JSON body.

        Args:
            url: Endpoint URL
            params: Query parameters (may carry credentials, never logged)
            domain: Overrides the client domain in raised errors

        Returns:
            Decoded JSON body

        Raises:
            FetchError: On transport failure, non-2xx status or invalid JSON
        """
        domain = domain or self.domain
        try:
            response = await self.client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise FetchError(domain, f"Request timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise FetchError(domain, f"Request failed: {type(e).__name__}") from e

        if not response.is_success:
            logger.warning("%s upstream returned HTTP %s", domain, response.status_code)
            raise FetchError(domain, f"Upstream returned HTTP {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(domain, "Upstream returned invalid JSON") from e

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
