"""Unit tests for the thread-safe registry decorator."""

import threading

import pytest

from neo_permissions.core.exceptions import InvalidPathError
from neo_permissions.core.protocols import REGISTRY_OPERATIONS, PermissionsRegistryProtocol
from neo_permissions.decorators import ThreadsafePermissionsRegistry
from neo_permissions.registry import PermissionsRegistry


def _try_acquire_from_other_thread(lock) -> bool:
    result = []

    def attempt():
        acquired = lock.acquire(blocking=False)
        if acquired:
            lock.release()
        result.append(acquired)

    thread = threading.Thread(target=attempt)
    thread.start()
    thread.join()
    return result[0]


class TestThreadsafeRegistry:
    """Test locking around registry operations."""

    def test_every_operation_is_wrapped(self):
        """Test each public operation goes through the lock."""
        for name in REGISTRY_OPERATIONS:
            assert hasattr(getattr(ThreadsafePermissionsRegistry, name), "__wrapped__"), name

    def test_satisfies_protocol(self, threadsafe_registry):
        """Test the wrapper can stand in for a registry."""
        assert isinstance(threadsafe_registry, PermissionsRegistryProtocol)
        assert isinstance(PermissionsRegistry(), PermissionsRegistryProtocol)

    def test_forwards_results(self):
        """Test return values pass through the wrapper."""
        registry = ThreadsafePermissionsRegistry(PermissionsRegistry())

        assert registry.assign_user_permission("user", "a: arg") is None
        assert registry.user_has_permission("user", "a.b")
        assert registry.get_user_permission_arg("user", "a") == "arg"
        assert registry.id_to_string(3) == "3"

    def test_lock_held_during_operation(self, threadsafe_registry):
        """Test another thread cannot take the lock while a mutation runs."""
        observed = []
        threadsafe_registry.permission_assigned.register(
            lambda args: observed.append(_try_acquire_from_other_thread(threadsafe_registry.lock))
        )

        threadsafe_registry.assign_user_permission("user", "a")

        assert observed == [False]

    def test_lock_released_after_error(self, threadsafe_registry):
        """Test a failing operation releases the lock."""
        with pytest.raises(InvalidPathError):
            threadsafe_registry.assign_user_permission("user", "a..b")

        assert _try_acquire_from_other_thread(threadsafe_registry.lock)

    def test_handlers_can_query_under_lock(self, threadsafe_registry):
        """Test the lock is re-entrant for handlers reading the registry."""
        seen = []
        threadsafe_registry.permission_assigned.register(
            lambda args: seen.append(threadsafe_registry.user_has_permission("user", "a"))
        )

        threadsafe_registry.assign_user_permission("user", "a")

        assert seen == [True]

    def test_concurrent_mutation(self):
        """Test concurrent writers do not lose updates."""
        registry = ThreadsafePermissionsRegistry(PermissionsRegistry())
        thread_count = 8
        per_thread = 200

        def worker(index: int):
            for n in range(per_thread):
                registry.assign_user_permission(f"user{index}", f"perm.{n}")
                registry.assign_group_to_user(f"user{index}", f"group{n % 5}")
                registry.user_has_permission(f"user{index}", f"perm.{n}")

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry.get_users()) == thread_count
        for index in range(thread_count):
            assert len(registry.get_user_permissions(f"user{index}")) == per_thread
            assert len(registry.get_groups_of_user(f"user{index}")) == 5
