"""Runtime settings resolved once at the CLI entry point.

Environment variables are read only here. Everything downstream receives a
``MotionCoreSettings`` instance explicitly.
"""

import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from motion_core.core.errors import ConfigInvalid

DEFAULT_REGISTRY_URL = "https://motion-core.dev/registry"
DEFAULT_REGISTRY_TTL_MS = 10 * 60 * 1000
DEFAULT_ASSET_TTL_MS = 24 * 60 * 60 * 1000
DEFAULT_STALE_MAX_AGE_MS = 30 * 24 * 60 * 60 * 1000
DEFAULT_HTTP_TIMEOUT_SECONDS = 15.0

ENV_REGISTRY_URL = "MOTION_CORE_REGISTRY_URL"
ENV_CACHE_DIR = "MOTION_CORE_CACHE_DIR"
ENV_REGISTRY_TTL = "MOTION_CORE_CACHE_TTL_MS"
ENV_ASSET_TTL = "MOTION_CORE_ASSET_CACHE_TTL_MS"
ENV_ASSUME_YES = "MOTION_CORE_CLI_ASSUME_YES"


@dataclass(frozen=True)
class MotionCoreSettings:
    """Immutable runtime settings.

    Attributes:
        registry_url: Base URL of the registry (no trailing slash)
        cache_dir: Root directory holding one subdirectory per registry namespace
        registry_ttl_ms: Freshness window for the registry index
        asset_ttl_ms: Freshness window for the asset bundle
        stale_max_age_ms: Oldest cache entry still usable as a network fallback
        assume_yes: Overwrite conflicts without prompting; enabled by any non-empty
            MOTION_CORE_CLI_ASSUME_YES value
        http_timeout_seconds: Per-request network timeout
    """

    registry_url: str
    cache_dir: Path
    registry_ttl_ms: int
    asset_ttl_ms: int
    stale_max_age_ms: int
    assume_yes: bool
    http_timeout_seconds: float

    def with_registry_url(self, url: str | None) -> "MotionCoreSettings":
        """Return settings pointing at ``url``, or self when no override is given."""
        if url is None:
            return self
        return replace(self, registry_url=normalize_registry_url(url))

    @staticmethod
    def from_env(env: Mapping[str, str]) -> "MotionCoreSettings":
        """Build settings from an environment mapping.

        Args:
            env: Environment variables (usually ``os.environ``)

        Returns:
            Settings with defaults applied for any variable that is unset

        Raises:
            ConfigInvalid: If a TTL variable is not a non-negative integer
        """
        registry_url = env.get(ENV_REGISTRY_URL) or DEFAULT_REGISTRY_URL
        cache_override = env.get(ENV_CACHE_DIR)
        if cache_override:
            cache_dir = Path(cache_override).expanduser()
        else:
            cache_dir = default_cache_dir(env)

        return MotionCoreSettings(
            registry_url=normalize_registry_url(registry_url),
            cache_dir=cache_dir,
            registry_ttl_ms=_read_ttl(env, ENV_REGISTRY_TTL, DEFAULT_REGISTRY_TTL_MS),
            asset_ttl_ms=_read_ttl(env, ENV_ASSET_TTL, DEFAULT_ASSET_TTL_MS),
            stale_max_age_ms=DEFAULT_STALE_MAX_AGE_MS,
            assume_yes=bool(env.get(ENV_ASSUME_YES)),
            http_timeout_seconds=DEFAULT_HTTP_TIMEOUT_SECONDS,
        )


def load_settings() -> MotionCoreSettings:
    """Load settings from the process environment."""
    return MotionCoreSettings.from_env(os.environ)


def normalize_registry_url(url: str) -> str:
    return url.strip().rstrip("/")


def default_cache_dir(env: Mapping[str, str]) -> Path:
    """Per-user cache directory, falling back to the system temp dir."""
    xdg = env.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg) / "motion-core"
    home = env.get("HOME") or env.get("USERPROFILE")
    if home:
        return Path(home) / ".cache" / "motion-core"
    return Path(tempfile.gettempdir()) / "motion-core"


def _read_ttl(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip()
    if not value.isdigit():
        raise ConfigInvalid(
            "environment", name, f"must be a non-negative integer of milliseconds, got '{raw}'"
        )
    return int(value)
