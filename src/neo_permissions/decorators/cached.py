"""Cached permissions registry.

Memoises query results in a bounded LRU map keyed by operation and
arguments. Any mutation clears the whole cache: one change to a group or to
the default set can alter the result for every user who reaches it.
"""

import functools
import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, Hashable, Iterable, Tuple

from ..core.protocols import MUTATING_OPERATIONS, PermissionsRegistryProtocol
from ..core.value_objects import PermissionStatus
from .base import PermissionsRegistryDecorator

logger = logging.getLogger(__name__)

CACHED_OPERATIONS = (
    "user_has_permission",
    "group_has_permission",
    "is_default_permission",
    "get_user_permission_arg",
    "get_group_permission_arg",
    "get_default_permission_arg",
    "get_user_permission_status",
    "get_group_permission_status",
    "get_default_permission_status",
    "user_has_any_sub_permission_of",
    "group_has_any_sub_permission_of",
    "is_or_any_sub_permission_of_is_default",
    "user_has_group",
    "group_extends_from_group",
    "is_default_group",
)

DEFAULT_MAX_SIZE = 1000


def _cached(method: Callable) -> Callable:
    """Answer the forwarded query from the cache when it has been seen before."""

    @functools.wraps(method)
    def wrapper(self, *args):
        return self._cached_call(method, args)

    return wrapper


def _invalidating(method: Callable) -> Callable:
    """Clear the cache once the forwarded mutation has run, even if it failed part way."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        finally:
            self.invalidate_cache()

    return wrapper


class CachedPermissionsRegistry(PermissionsRegistryDecorator):
    """Registry decorator caching scalar query results with LRU eviction.

    Cached: permission checks, arguments, statuses, sub-permission checks
    and group membership checks. Bulk checks are answered through the cached
    single checks. Assertions and listings always reach the wrapped registry.
    Queries that raise are not cached.

    Compose it beneath PermissionsRegistryWithEvents so every per-item
    mutation of a bulk operation clears the cache before handlers run.
    """

    def __init__(self, inner: PermissionsRegistryProtocol, max_size: int = DEFAULT_MAX_SIZE):
        super().__init__(inner)
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")

        self.max_size = max_size
        self._cache: "OrderedDict[Tuple[Any, ...], Any]" = OrderedDict()
        self._stats = {"hits": 0, "misses": 0, "evictions": 0, "invalidations": 0}
        self._cache_lock = threading.Lock()

        logger.debug(f"Permissions cache initialized with max_size={self.max_size}")

    def invalidate_cache(self) -> None:
        """Drop every cached result."""
        with self._cache_lock:
            if self._cache:
                self._cache.clear()
                self._stats["invalidations"] += 1

    def get_cache_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._cache_lock:
            total_requests = self._stats["hits"] + self._stats["misses"]
            return {
                "entries": len(self._cache),
                "max_entries": self.max_size,
                "total_hits": self._stats["hits"],
                "total_misses": self._stats["misses"],
                "evictions": self._stats["evictions"],
                "invalidations": self._stats["invalidations"],
                "hit_rate": (self._stats["hits"] / total_requests) if total_requests > 0 else 0.0,
            }

    def _cached_call(self, method: Callable, args: Tuple[Any, ...]) -> Any:
        key = (method.__name__, *args)
        try:
            hash(key)
        except TypeError:
            # Unhashable ids go straight through; the wrapped registry reports them
            return method(self, *args)

        with self._cache_lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self._stats["hits"] += 1
                return self._cache[key]
            self._stats["misses"] += 1

        value = method(self, *args)

        with self._cache_lock:
            self._cache[key] = value
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_size:
                self._cache.popitem(last=False)
                self._stats["evictions"] += 1

        return value

    # Bulk checks

    def get_user_permission_statuses(
        self, user_id: Any, permissions: Iterable[str]
    ) -> Dict[str, PermissionStatus]:
        return {p: self.get_user_permission_status(user_id, p) for p in permissions}

    def get_group_permission_statuses(
        self, group_id: Hashable, permissions: Iterable[str]
    ) -> Dict[str, PermissionStatus]:
        return {p: self.get_group_permission_status(group_id, p) for p in permissions}

    def get_default_permission_statuses(self, permissions: Iterable[str]) -> Dict[str, PermissionStatus]:
        return {p: self.get_default_permission_status(p) for p in permissions}

    def user_has_all_permissions(self, user_id: Any, permissions: Iterable[str]) -> bool:
        return all(self.user_has_permission(user_id, p) for p in permissions)

    def user_has_any_permissions(self, user_id: Any, permissions: Iterable[str]) -> bool:
        return any(self.user_has_permission(user_id, p) for p in permissions)

    def group_has_all_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> bool:
        return all(self.group_has_permission(group_id, p) for p in permissions)

    def group_has_any_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> bool:
        return any(self.group_has_permission(group_id, p) for p in permissions)

    def are_all_default_permissions(self, permissions: Iterable[str]) -> bool:
        return all(self.is_default_permission(p) for p in permissions)

    def any_are_default_permissions(self, permissions: Iterable[str]) -> bool:
        return any(self.is_default_permission(p) for p in permissions)


for _name in CACHED_OPERATIONS:
    setattr(CachedPermissionsRegistry, _name, _cached(getattr(PermissionsRegistryDecorator, _name)))

for _name in MUTATING_OPERATIONS:
    setattr(CachedPermissionsRegistry, _name, _invalidating(getattr(PermissionsRegistryDecorator, _name)))

del _name
