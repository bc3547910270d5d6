"""Cached-query hooks: current value plus a shallow-merge setter."""
from typing import Any, Callable, Dict, Hashable

from stockmind.client.api import ApiClient
from stockmind.client.cache import QueryCache

_MISSING = object()


class CachedQuery:
    """
    A query bound to one cache key.

    data fetches on first access and then serves the cache; set() merges a
    partial mapping into the cached value without touching the network.
    Staleness and refetching are left to the caller (refetch/invalidate).
    """

    def __init__(self, cache: QueryCache, key: Hashable, fetcher: Callable[[], Any]):
        self.cache = cache
        self.key = key
        self._fetcher = fetcher

    @property
    def data(self) -> Any:
        value = self.cache.get(self.key, _MISSING)
        if value is _MISSING:
            value = self.refetch()
        return value

    @property
    def is_cached(self) -> bool:
        return self.key in self.cache

    def refetch(self) -> Any:
        return self.cache.set(self.key, self._fetcher())

    def set(self, partial: Dict[str, Any]) -> Dict[str, Any]:
        return self.cache.merge(self.key, partial)

    def invalidate(self) -> None:
        self.cache.invalidate(self.key)


def use_current_user(client: ApiClient, cache: QueryCache, user_id: str) -> CachedQuery:
    """Hook over /api/auth/me."""
    return CachedQuery(
        cache,
        ("auth", "me"),
        lambda: client.get("/api/auth/me", user_id=user_id),
    )


def use_script(client: ApiClient, cache: QueryCache, user_id: str, script_id: str) -> CachedQuery:
    """Hook over a single library script."""
    return CachedQuery(
        cache,
        ("scripts", script_id),
        lambda: client.get(f"/api/scripts/{script_id}", user_id=user_id),
    )


def use_projects(client: ApiClient, cache: QueryCache, user_id: str) -> CachedQuery:
    """Hook over the user's project list (a list, so set() does not apply)."""
    return CachedQuery(
        cache,
        ("projects",),
        lambda: client.get("/api/projects", user_id=user_id),
    )
