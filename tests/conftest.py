"""Pytest configuration and fixtures for neo-permissions tests."""

import pytest

from neo_permissions.config import RegistrySettings, get_settings
from neo_permissions.decorators import (
    CachedPermissionsRegistry,
    PermissionsRegistryWithEvents,
    ThreadsafePermissionsRegistry,
)
from neo_permissions.registry import MembershipGraph, PermissionSet, PermissionsRegistry


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep cached environment settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def permission_set():
    """Empty permission set."""
    return PermissionSet()


@pytest.fixture
def membership_graph():
    """Empty membership graph."""
    return MembershipGraph()


@pytest.fixture
def registry():
    """Plain registry with string user ids."""
    return PermissionsRegistry()


@pytest.fixture
def int_registry():
    """Registry keyed by integer user ids, validating round-trips."""
    return PermissionsRegistry(id_to_string=str, id_from_string=int, validate_ids=True)


@pytest.fixture
def events_registry():
    """Registry raising change events."""
    return PermissionsRegistryWithEvents(PermissionsRegistry())


@pytest.fixture
def cached_registry():
    """Registry caching query results."""
    return CachedPermissionsRegistry(PermissionsRegistry(), max_size=8)


@pytest.fixture
def threadsafe_registry():
    """Thread-safe registry raising change events."""
    return ThreadsafePermissionsRegistry(PermissionsRegistryWithEvents(PermissionsRegistry()))


@pytest.fixture
def settings():
    """Settings built without reading a .env file."""
    return RegistrySettings(_env_file=None)


@pytest.fixture
def populated_registry(registry):
    """Registry with a small group hierarchy.

    admins -> moderators -> members, with "members" as a default group.
    """
    registry.assign_group_permissions("members", ["forum.read", "forum.post"])
    registry.assign_group_permissions("moderators", ["forum.moderate", "-forum.post.images"])
    registry.assign_group_permissions("admins", ["forum.*", "server.restart: nightly"])

    registry.assign_group_to_group("moderators", "members")
    registry.assign_group_to_group("admins", "moderators")
    registry.assign_default_group("members")

    registry.assign_group_to_user("alice", "admins")
    registry.assign_group_to_user("bob", "moderators")
    registry.assign_user_permission("carol", "forum.read")
    return registry
