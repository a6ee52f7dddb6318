"""
In-memory response cache for GET endpoints.

Responses are keyed by request path plus query string and kept for a fixed
duration that depends on the route class: admin endpoints use a short TTL,
everything else the default one. There is no capacity bound and no
single-flight: concurrent misses on the same key all recompute.

Wiring into FastAPI happens in two halves:

* ``cache_lookup`` is a dependency. Declared after a route's auth
  dependencies, it only runs for callers that passed them. A fresh entry
  short-circuits the request by raising ``CacheHit``.
* ``CachedRoute`` is the router's route class. After the endpoint ran it
  stores the JSON body under the key remembered by ``cache_lookup``.
"""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from fastapi import Request, Response
from fastapi.routing import APIRoute

from .config import settings
from .logging_config import get_logger

logger = get_logger(__name__)

ADMIN_PREFIX = "/api/admin"


@dataclass
class CacheEntry:
    data: bytes
    timestamp: float


class ResponseCache:
    """Process-wide map of ``key -> CacheEntry`` with time-based expiry."""

    def __init__(
        self,
        default_ttl: int = settings.CACHE_TTL,
        admin_ttl: int = settings.ADMIN_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self.admin_ttl = admin_ttl
        self.clock = clock
        self._store: Dict[str, CacheEntry] = {}

    def ttl_for(self, key: str) -> int:
        """Short TTL for admin endpoints, default TTL elsewhere."""
        return self.admin_ttl if key.startswith(ADMIN_PREFIX) else self.default_ttl

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the entry when it is still within its TTL window."""
        entry = self._store.get(key)
        if entry is None:
            return None
        if self.clock() - entry.timestamp >= self.ttl_for(key):
            del self._store[key]
            return None
        return entry

    def set(self, key: str, data: bytes) -> CacheEntry:
        entry = CacheEntry(data=data, timestamp=self.clock())
        self._store[key] = entry
        return entry

    def invalidate(self, key: str) -> bool:
        """Drop one exact key."""
        return self._store.pop(key, None) is not None

    def invalidate_prefix(self, *prefixes: str) -> int:
        """Drop every key starting with one of the prefixes; returns the count."""
        doomed = [key for key in self._store if key.startswith(prefixes)]
        for key in doomed:
            del self._store[key]
        if doomed:
            logger.debug("Cache invalidated %d entries for %s", len(doomed), ", ".join(prefixes))
        return len(doomed)

    def clear(self) -> None:
        self._store.clear()

    def stats(self) -> dict:
        return {
            "entries": len(self._store),
            "default_ttl": self.default_ttl,
            "admin_ttl": self.admin_ttl,
        }

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store


response_cache = ResponseCache()


def cache_key(request: Request) -> str:
    """Path plus query string."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class CacheHit(Exception):
    """Raised by ``cache_lookup`` to answer a request from the cache."""

    def __init__(self, entry: CacheEntry):
        self.entry = entry


async def cache_lookup(request: Request) -> None:
    """Serve fresh cached GET responses; remember the key otherwise."""
    if request.method != "GET":
        return
    key = cache_key(request)
    entry = response_cache.get(key)
    if entry is not None:
        raise CacheHit(entry)
    request.state.cache_key = key


async def cache_hit_handler(request: Request, exc: CacheHit) -> Response:
    return Response(
        content=exc.entry.data,
        media_type="application/json",
        headers={"X-Cache": "HIT"},
    )


class CachedRoute(APIRoute):
    """Route class storing successful JSON responses in ``response_cache``."""

    def get_route_handler(self) -> Callable:
        original_handler = super().get_route_handler()

        async def cached_route_handler(request: Request) -> Response:
            response = await original_handler(request)
            key = getattr(request.state, "cache_key", None)
            if key and response.status_code == 200 and response.media_type == "application/json":
                response_cache.set(key, response.body)
                response.headers["X-Cache"] = "MISS"
            return response

        return cached_route_handler
