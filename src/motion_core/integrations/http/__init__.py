from motion_core.integrations.http.abc import HttpFetcher, HttpFetchError, HttpNotFound
from motion_core.integrations.http.real import RealHttpFetcher

__all__ = [
    "HttpFetchError",
    "HttpFetcher",
    "HttpNotFound",
    "RealHttpFetcher",
]
