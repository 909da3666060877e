"""Unit tests for the caching registry decorator."""

import pytest

from neo_permissions import create_permissions_registry
from neo_permissions.config import RegistrySettings
from neo_permissions.core.exceptions import InvalidOperationError, InvalidPathError
from neo_permissions.core.protocols import MUTATING_OPERATIONS, PermissionsRegistryProtocol
from neo_permissions.decorators import (
    CachedPermissionsRegistry,
    PermissionsRegistryWithEvents,
    ThreadsafePermissionsRegistry,
)
from neo_permissions.decorators.cached import CACHED_OPERATIONS
from neo_permissions.registry import PermissionsRegistry


class TestCaching:
    """Test query results are reused."""

    def test_every_operation_is_wrapped(self):
        """Test cached queries and mutations go through their wrappers."""
        for name in CACHED_OPERATIONS + MUTATING_OPERATIONS:
            assert hasattr(getattr(CachedPermissionsRegistry, name), "__wrapped__"), name

    def test_satisfies_protocol(self, cached_registry):
        """Test the wrapper can stand in for a registry."""
        assert isinstance(cached_registry, PermissionsRegistryProtocol)

    def test_repeated_query_is_answered_from_cache(self, cached_registry, mocker):
        """Test the wrapped registry is asked once per distinct query."""
        cached_registry.assign_user_permission("user", "a: arg")
        has_permission = mocker.spy(cached_registry.inner, "user_has_permission")
        get_arg = mocker.spy(cached_registry.inner, "get_user_permission_arg")

        for _ in range(3):
            assert cached_registry.user_has_permission("user", "a.b")
            assert cached_registry.get_user_permission_arg("user", "a") == "arg"
        assert not cached_registry.user_has_permission("user", "b")

        assert has_permission.call_count == 2
        assert get_arg.call_count == 1

        stats = cached_registry.get_cache_stats()
        assert stats["total_hits"] == 4
        assert stats["total_misses"] == 3
        assert stats["entries"] == 3

    def test_bulk_checks_reuse_single_results(self, cached_registry, mocker):
        """Test bulk checks are served from the cached single checks."""
        cached_registry.assign_user_permission("user", "a")
        has_permission = mocker.spy(cached_registry.inner, "user_has_permission")
        get_status = mocker.spy(cached_registry.inner, "get_user_permission_status")

        assert cached_registry.user_has_all_permissions("user", ["a", "a.b"])
        assert cached_registry.user_has_any_permissions("user", ["a.b", "x"])
        statuses = cached_registry.get_user_permission_statuses("user", ["a", "x"])
        assert cached_registry.get_user_permission_status("user", "x") == statuses["x"]

        assert has_permission.call_count == 2
        assert get_status.call_count == 2
        assert statuses["a"].has_permission
        assert not statuses["x"].has_permission

    def test_failing_query_is_not_cached(self, cached_registry, mocker):
        """Test errors reach the caller every time."""
        has_permission = mocker.spy(cached_registry.inner, "user_has_permission")

        for _ in range(2):
            with pytest.raises(InvalidPathError):
                cached_registry.user_has_permission("user", "a..b")

        assert has_permission.call_count == 2
        assert cached_registry.get_cache_stats()["entries"] == 0

    def test_unhashable_id_reaches_wrapped_registry(self, cached_registry):
        """Test ids that cannot key the cache are still rejected by the registry."""
        with pytest.raises(InvalidOperationError):
            cached_registry.user_has_permission(["not", "hashable"], "a")

    def test_least_recently_used_is_evicted(self, cached_registry, mocker):
        """Test the cache stays within max_size, dropping the oldest entry."""
        has_permission = mocker.spy(cached_registry.inner, "user_has_permission")

        for n in range(cached_registry.max_size):
            cached_registry.user_has_permission("user", f"p{n}")
        cached_registry.user_has_permission("user", "p0")
        cached_registry.user_has_permission("user", "overflow")

        stats = cached_registry.get_cache_stats()
        assert stats["entries"] == cached_registry.max_size
        assert stats["evictions"] == 1

        cached_registry.user_has_permission("user", "p0")
        assert has_permission.call_count == cached_registry.max_size + 1
        cached_registry.user_has_permission("user", "p1")
        assert has_permission.call_count == cached_registry.max_size + 2

    def test_max_size_must_be_positive(self):
        """Test an empty cache is rejected."""
        with pytest.raises(ValueError):
            CachedPermissionsRegistry(PermissionsRegistry(), max_size=0)


class TestInvalidation:
    """Test mutations clear cached results."""

    def test_assign_invalidates(self, cached_registry):
        """Test a grant is visible after a cached denial."""
        assert not cached_registry.user_has_permission("user", "a")

        cached_registry.assign_user_permission("user", "a: first")

        assert cached_registry.user_has_permission("user", "a")
        assert cached_registry.get_user_permission_arg("user", "a") == "first"

        cached_registry.assign_user_permission("user", "a: second")

        assert cached_registry.get_user_permission_arg("user", "a") == "second"

    def test_revoke_invalidates(self, cached_registry):
        """Test a revocation is visible after a cached grant."""
        cached_registry.assign_default_permission("a")
        assert cached_registry.is_default_permission("a")
        assert cached_registry.user_has_permission("user", "a.b")

        cached_registry.revoke_default_permission("a")

        assert not cached_registry.is_default_permission("a")
        assert not cached_registry.user_has_permission("user", "a.b")

    def test_clear_invalidates(self, cached_registry):
        """Test clearing the registry drops every cached answer."""
        cached_registry.assign_group_to_user("user", "g")
        cached_registry.assign_group_permission("g", "a")
        assert cached_registry.user_has_group("user", "g")
        assert cached_registry.user_has_permission("user", "a")

        cached_registry.clear()

        assert not cached_registry.user_has_group("user", "g")
        assert not cached_registry.user_has_permission("user", "a")
        assert cached_registry.get_cache_stats()["entries"] == 2

    def test_group_change_reaches_members(self, cached_registry):
        """Test a change to a parent group invalidates its members' results."""
        cached_registry.assign_group_to_user("user", "child")
        assert not cached_registry.user_has_permission("user", "a")

        cached_registry.assign_group_to_group("child", "parent")
        cached_registry.assign_group_permission("parent", "a")

        assert cached_registry.user_has_permission("user", "a")
        assert cached_registry.group_extends_from_group("child", "parent")

        cached_registry.revoke_all_groups_from_group("child")

        assert not cached_registry.user_has_permission("user", "a")

    def test_failed_mutation_still_invalidates(self, cached_registry):
        """Test the cache is cleared even when a mutation raises."""
        assert not cached_registry.user_has_permission("user", "a")

        with pytest.raises(InvalidPathError):
            cached_registry.assign_user_permission("user", "b..c")

        assert cached_registry.get_cache_stats()["entries"] == 0

    def test_handlers_see_each_item_of_a_bulk_operation(self):
        """Test handlers querying the outer registry never read results cached before the item."""
        registry = ThreadsafePermissionsRegistry(
            PermissionsRegistryWithEvents(CachedPermissionsRegistry(PermissionsRegistry()))
        )
        seen = []
        registry.permission_assigned.register(
            lambda args: seen.append(registry.user_has_permission("user", "b"))
        )

        registry.assign_user_permissions("user", ["a", "b"])

        assert seen == [False, True]


class TestCachedFactory:
    """Test the factory composes the cache from settings."""

    def test_cache_is_innermost(self):
        """Test the cache sits beneath events and the lock."""
        registry = create_permissions_registry(
            RegistrySettings(_env_file=None, enable_cache=True, enable_events=True, cache_max_size=5)
        )

        assert isinstance(registry, ThreadsafePermissionsRegistry)
        assert isinstance(registry.inner, PermissionsRegistryWithEvents)
        assert isinstance(registry.inner.inner, CachedPermissionsRegistry)
        assert registry.inner.inner.max_size == 5

    def test_cache_off_by_default(self, settings):
        """Test no cache is composed unless enabled."""
        registry = create_permissions_registry(settings)

        assert type(registry.inner) is PermissionsRegistry

    def test_cached_registry_from_factory(self):
        """Test a factory-built cached registry still sees mutations."""
        registry = create_permissions_registry(
            RegistrySettings(_env_file=None, enable_cache=True, thread_safe=False)
        )

        assert isinstance(registry, CachedPermissionsRegistry)
        assert not registry.user_has_permission("user", "a")
        registry.assign_user_permission("user", "a")
        assert registry.user_has_permission("user", "a")
