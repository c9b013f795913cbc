"""TTL-bound local cache for registry documents.

Layout::

    <cache_dir>/
        registry-<urlsafe base64 of registry URL>/
            registry.json     # index envelope, registry TTL
            components.json   # asset bundle envelope, asset TTL

Each file is a JSON envelope ``{"fetchedAt": <epoch seconds>, "payload": <base64>}``
written via temp file + rename, so a concurrent reader sees either the previous
envelope or the new one and the timestamp always matches the payload.
"""

import base64
import binascii
import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from motion_core.core.settings import MotionCoreSettings
from motion_core.integrations.filesystem import atomic_write_bytes
from motion_core.integrations.time import Time

logger = logging.getLogger(__name__)

INDEX_KEY = "registry.json"
ASSETS_KEY = "components.json"


@dataclass(frozen=True)
class CacheInfo:
    root: Path
    registry_ttl_ms: int
    asset_ttl_ms: int


@dataclass(frozen=True)
class CachedPayload:
    payload: bytes
    age_ms: int


def namespace_for_url(url: str) -> str:
    """Deterministic cache namespace for a registry URL.

    URL-safe base64 is injective, so distinct URLs never share a slot, and the
    result contains only filename-safe characters.
    """
    encoded = base64.urlsafe_b64encode(url.encode("utf-8")).decode("ascii").rstrip("=")
    return f"registry-{encoded}"


class CacheStore:
    """Filesystem cache with independent TTLs for the index and the asset bundle."""

    def __init__(
        self,
        *,
        root: Path,
        time: Time,
        registry_ttl_ms: int,
        asset_ttl_ms: int,
        stale_max_age_ms: int,
    ) -> None:
        self._root = root
        self._time = time
        self._registry_ttl_ms = registry_ttl_ms
        self._asset_ttl_ms = asset_ttl_ms
        self._stale_max_age_ms = stale_max_age_ms

    @staticmethod
    def from_settings(settings: MotionCoreSettings, time: Time) -> "CacheStore":
        return CacheStore(
            root=settings.cache_dir,
            time=time,
            registry_ttl_ms=settings.registry_ttl_ms,
            asset_ttl_ms=settings.asset_ttl_ms,
            stale_max_age_ms=settings.stale_max_age_ms,
        )

    @property
    def root(self) -> Path:
        return self._root

    def ttl_ms(self, key: str) -> int:
        """TTL applied to ``key``: asset TTL for the bundle, registry TTL otherwise."""
        if key == ASSETS_KEY:
            return self._asset_ttl_ms
        return self._registry_ttl_ms

    def get(self, namespace: str, key: str) -> bytes | None:
        """Return cached bytes only if the entry is within its TTL."""
        entry = self._read(namespace, key)
        if entry is None:
            logger.debug("cache miss %s/%s", namespace, key)
            return None
        ttl = self.ttl_ms(key)
        if entry.age_ms > ttl:
            logger.debug(
                "cache stale %s/%s (age %dms > ttl %dms)", namespace, key, entry.age_ms, ttl
            )
            return None
        logger.debug("cache hit %s/%s (age %dms)", namespace, key, entry.age_ms)
        return entry.payload

    def get_stale(self, namespace: str, key: str) -> CachedPayload | None:
        """Return cached bytes ignoring TTL, for use when a refetch failed.

        Entries older than the stale max age are not returned.
        """
        entry = self._read(namespace, key)
        if entry is None:
            return None
        if entry.age_ms > self._stale_max_age_ms:
            logger.debug("cache entry %s/%s too old for fallback", namespace, key)
            return None
        return entry

    def put(self, namespace: str, key: str, payload: bytes) -> None:
        """Store payload with the current timestamp, atomically."""
        envelope = {
            "fetchedAt": self._time.now(),
            "payload": base64.b64encode(payload).decode("ascii"),
        }
        path = self._path(namespace, key)
        atomic_write_bytes(path, json.dumps(envelope).encode("utf-8"))
        logger.debug("cache write %s (%d bytes)", path, len(payload))

    def clear(self, namespace: str | None = None, *, confirm: bool) -> list[Path]:
        """Delete one namespace, or every namespace when ``namespace`` is None.

        Args:
            namespace: Namespace to delete, or None for the whole cache
            confirm: Must be True; deletion is never implicit

        Returns:
            Namespace directories that were removed

        Raises:
            ValueError: If confirm is not True
        """
        if confirm is not True:
            raise ValueError("Refusing to clear the cache without confirmation")

        if namespace is not None:
            targets = [self._root / namespace]
        elif self._root.is_dir():
            targets = sorted(p for p in self._root.iterdir() if p.is_dir())
        else:
            targets = []

        removed: list[Path] = []
        for target in targets:
            if target.exists():
                shutil.rmtree(target)
                removed.append(target)
                logger.debug("removed cache namespace %s", target)
        return removed

    def namespaces(self) -> list[str]:
        if not self._root.is_dir():
            return []
        return sorted(p.name for p in self._root.iterdir() if p.is_dir())

    def info(self) -> CacheInfo:
        return CacheInfo(
            root=self._root,
            registry_ttl_ms=self._registry_ttl_ms,
            asset_ttl_ms=self._asset_ttl_ms,
        )

    def _path(self, namespace: str, key: str) -> Path:
        return self._root / namespace / key

    def _read(self, namespace: str, key: str) -> CachedPayload | None:
        path = self._path(namespace, key)
        if not path.is_file():
            return None
        try:
            envelope = json.loads(path.read_bytes())
            fetched_at = float(envelope["fetchedAt"])
            payload = base64.b64decode(envelope["payload"], validate=True)
        except (OSError, ValueError, KeyError, TypeError, binascii.Error) as e:
            logger.debug("ignoring unreadable cache entry %s: %s", path, e)
            return None
        age_ms = max(0, int((self._time.now() - fetched_at) * 1000))
        return CachedPayload(payload=payload, age_ms=age_ms)
