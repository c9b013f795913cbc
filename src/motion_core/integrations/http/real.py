"""HTTP fetcher backed by httpx."""

import logging

import httpx

from motion_core import __version__
from motion_core.integrations.http.abc import HttpFetcher, HttpFetchError, HttpNotFound

logger = logging.getLogger(__name__)


class RealHttpFetcher(HttpFetcher):
    """Production implementation issuing real requests with a bounded timeout."""

    def __init__(self, *, timeout: float, transport: httpx.BaseTransport | None = None) -> None:
        """Create fetcher.

        Args:
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass ``httpx.MockTransport``)
        """
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            headers={"User-Agent": f"motion-core-cli/{__version__}"},
        )

    def get(self, url: str) -> bytes:
        logger.debug("GET %s", url)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as e:
            raise HttpFetchError(url, str(e) or type(e).__name__) from e

        logger.debug("GET %s -> %d", url, response.status_code)
        if response.status_code == 404:
            raise HttpNotFound(url)
        if response.is_error:
            raise HttpFetchError(url, f"HTTP {response.status_code}")
        return response.content
