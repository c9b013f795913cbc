"""Registry client: fetches the index and asset bundle with cache fallback.

Fetch policy for each document:

1. Serve a cache entry that is within its TTL without touching the network.
2. Otherwise GET the document (one retry with backoff on transport errors).
3. Validate the payload; malformed documents are fatal and never cached.
   A cache that cannot be written only produces a warning.
4. On network failure fall back to a stale cache entry with a warning, or fail
   with RegistryUnreachable when nothing is cached.
"""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TypeVar

from motion_core import __version__
from motion_core.core.cache_store import ASSETS_KEY, INDEX_KEY, CacheStore, namespace_for_url
from motion_core.core.errors import MalformedRegistry, RegistryUnreachable
from motion_core.core.user_feedback import UserFeedback
from motion_core.integrations.http import HttpFetcher, HttpFetchError, HttpNotFound
from motion_core.integrations.time import Time
from motion_core.models.registry import (
    AssetBundle,
    RegistryIndex,
    parse_asset_bundle,
    parse_registry_index,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRY_BACKOFF_SECONDS = 0.5


@dataclass(frozen=True)
class RegistryCatalog:
    """Index and asset bundle fetched together."""

    index: RegistryIndex
    assets: AssetBundle


class RegistryClient:
    """Fetches registry documents for a single base URL."""

    def __init__(
        self,
        *,
        base_url: str,
        http: HttpFetcher,
        cache: CacheStore,
        time: Time,
        feedback: UserFeedback,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http
        self._cache = cache
        self._time = time
        self._feedback = feedback
        self._namespace = namespace_for_url(self._base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def index_url(self) -> str:
        return f"{self._base_url}/{INDEX_KEY}"

    @property
    def assets_url(self) -> str:
        return f"{self._base_url}/{ASSETS_KEY}"

    def fetch_index(self) -> RegistryIndex:
        """Fetch the registry index.

        Raises:
            RegistryUnreachable: If the network fails and nothing usable is cached
            MalformedRegistry: If the fetched document does not match the schema
        """
        index = self._fetch_document(INDEX_KEY, self.index_url, parse_registry_index)
        if index.requires_newer_cli(__version__):
            self._feedback.warning(
                f"Registry {index.name} {index.version} expects motion-core "
                f">= {index.min_cli_version} (installed: {__version__}). "
                "Upgrade the CLI if installation fails."
            )
        return index

    def fetch_assets(self) -> AssetBundle:
        """Fetch and decode the asset bundle.

        Raises:
            RegistryUnreachable: If the network fails and nothing usable is cached
            MalformedRegistry: If the document is not a map of base64 strings
        """
        return self._fetch_document(ASSETS_KEY, self.assets_url, parse_asset_bundle)

    def fetch_catalog(self) -> RegistryCatalog:
        """Fetch index and assets concurrently.

        The two documents are independent, so neither request waits on the other.
        Errors from either fetch propagate unchanged.
        """
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="motion-core-fetch") as pool:
            index_future = pool.submit(self.fetch_index)
            assets_future = pool.submit(self.fetch_assets)
            index = index_future.result()
            assets = assets_future.result()
        return RegistryCatalog(index=index, assets=assets)

    def _fetch_document(self, key: str, url: str, parse: Callable[[bytes, str], T]) -> T:
        fresh = self._cache.get(self._namespace, key)
        if fresh is not None:
            try:
                return parse(fresh, url)
            except MalformedRegistry as e:
                logger.debug("discarding malformed cache entry for %s: %s", url, e)

        try:
            payload = self._download(url)
        except HttpFetchError as e:
            return self._fallback_to_stale(key, url, parse, e)

        document = parse(payload, url)
        try:
            self._cache.put(self._namespace, key, payload)
        except OSError as e:
            logger.debug("cache write for %s failed: %s", url, e)
            self._feedback.warning(
                f"Could not write registry cache under {self._cache.root} ({e.strerror or e}); "
                "continuing without caching"
            )
        return document

    def _download(self, url: str) -> bytes:
        try:
            return self._http.get(url)
        except HttpNotFound:
            raise
        except HttpFetchError as e:
            logger.debug(
                "fetch of %s failed (%s); retrying in %.1fs", url, e, RETRY_BACKOFF_SECONDS
            )
            self._time.sleep(RETRY_BACKOFF_SECONDS)
        return self._http.get(url)

    def _fallback_to_stale(
        self, key: str, url: str, parse: Callable[[bytes, str], T], error: HttpFetchError
    ) -> T:
        stale = self._cache.get_stale(self._namespace, key)
        if stale is None:
            raise RegistryUnreachable(url, error.reason) from error

        try:
            document = parse(stale.payload, url)
        except MalformedRegistry:
            raise RegistryUnreachable(url, error.reason) from error

        minutes = stale.age_ms // 60_000
        self._feedback.warning(
            f"Could not reach {url} ({error.reason}); using cached copy from {minutes} min ago"
        )
        return document
