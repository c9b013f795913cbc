"""HTTP fetch abstraction for registry documents."""

from abc import ABC, abstractmethod


class HttpFetchError(Exception):
    """A request failed at the transport level or returned a non-success status."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class HttpNotFound(HttpFetchError):
    """The server answered 404 for the requested URL."""

    def __init__(self, url: str) -> None:
        super().__init__(url, "HTTP 404 Not Found")


class HttpFetcher(ABC):
    """Abstract read-only HTTP access.

    Only GET is needed: the registry is two static JSON documents.
    """

    @abstractmethod
    def get(self, url: str) -> bytes:
        """Fetch the body at ``url``.

        Args:
            url: Absolute URL to fetch

        Returns:
            Raw response body

        Raises:
            HttpNotFound: If the server answers 404
            HttpFetchError: On timeout, connection failure or other non-2xx status
        """
        ...
