"""Permissions changed event arguments.

ONLY event payloads - immutable records describing a single change to a
permissions registry, raised by PermissionsRegistryWithEvents.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Hashable, Optional

from ..value_objects import Permission
from .target import PermissionsChangedEventTarget


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PermissionsChangedEventArgs:
    """Base payload for every registry change.

    Only one of ``user_targeted`` and ``group_targeted`` is set, matching
    ``target``; both are None for default-permission and whole-registry
    changes.
    """

    registry: Any = field(repr=False, compare=False)
    target: PermissionsChangedEventTarget

    user_targeted: Optional[Any] = None
    group_targeted: Optional[Hashable] = None

    timestamp: datetime = field(default_factory=_utc_now, compare=False)

    def user_was_affected(self, user_id: Any) -> bool:
        """Whether the change could alter what the given user is permitted.

        Default-permission and whole-registry changes affect everyone; a
        group change affects every user who has that group, directly,
        transitively or through the default groups.

        Group membership is read from ``registry`` when this is called, so
        the answer reflects the registry as it is then.
        """
        if self.target in (PermissionsChangedEventTarget.ALL, PermissionsChangedEventTarget.DEFAULT_PERMISSIONS):
            return True

        if self.target == PermissionsChangedEventTarget.USER:
            return self.user_targeted == user_id

        return self.registry.user_has_group(user_id, self.group_targeted)


@dataclass(frozen=True)
class PermissionAssignedEventArgs(PermissionsChangedEventArgs):
    """A permission was assigned; ``old_value`` is what it replaced."""

    permission: Optional[str] = None
    old_value: Optional[Permission] = None

    @classmethod
    def about_user(cls, registry: Any, user_id: Any, permission: str, old_value: Optional[Permission]):
        return cls(registry, PermissionsChangedEventTarget.USER, user_targeted=user_id,
                   permission=permission, old_value=old_value)

    @classmethod
    def about_group(cls, registry: Any, group_id: Hashable, permission: str, old_value: Optional[Permission]):
        return cls(registry, PermissionsChangedEventTarget.GROUP, group_targeted=group_id,
                   permission=permission, old_value=old_value)

    @classmethod
    def about_default_permissions(cls, registry: Any, permission: str, old_value: Optional[Permission]):
        return cls(registry, PermissionsChangedEventTarget.DEFAULT_PERMISSIONS,
                   permission=permission, old_value=old_value)


@dataclass(frozen=True)
class PermissionRevokedEventArgs(PermissionsChangedEventArgs):
    """A permission entry was removed."""

    permission: Optional[str] = None
    removed: Optional[Permission] = None

    @classmethod
    def about_user(cls, registry: Any, user_id: Any, permission: str, removed: Permission):
        return cls(registry, PermissionsChangedEventTarget.USER, user_targeted=user_id,
                   permission=permission, removed=removed)

    @classmethod
    def about_group(cls, registry: Any, group_id: Hashable, permission: str, removed: Permission):
        return cls(registry, PermissionsChangedEventTarget.GROUP, group_targeted=group_id,
                   permission=permission, removed=removed)

    @classmethod
    def about_default_permissions(cls, registry: Any, permission: str, removed: Permission):
        return cls(registry, PermissionsChangedEventTarget.DEFAULT_PERMISSIONS,
                   permission=permission, removed=removed)


@dataclass(frozen=True)
class PermissionGroupAssignedEventArgs(PermissionsChangedEventArgs):
    """A group was assigned to a user, another group, or the defaults."""

    group_id: Optional[Hashable] = None

    @classmethod
    def about_user(cls, registry: Any, user_id: Any, group_id: Hashable):
        return cls(registry, PermissionsChangedEventTarget.USER, user_targeted=user_id, group_id=group_id)

    @classmethod
    def about_group(cls, registry: Any, target_group_id: Hashable, group_id: Hashable):
        return cls(registry, PermissionsChangedEventTarget.GROUP, group_targeted=target_group_id,
                   group_id=group_id)

    @classmethod
    def about_default_permissions(cls, registry: Any, group_id: Hashable):
        return cls(registry, PermissionsChangedEventTarget.DEFAULT_PERMISSIONS, group_id=group_id)


@dataclass(frozen=True)
class PermissionGroupRevokedEventArgs(PermissionsChangedEventArgs):
    """A group membership was removed."""

    group_id: Optional[Hashable] = None

    @classmethod
    def about_user(cls, registry: Any, user_id: Any, group_id: Hashable):
        return cls(registry, PermissionsChangedEventTarget.USER, user_targeted=user_id, group_id=group_id)

    @classmethod
    def about_group(cls, registry: Any, target_group_id: Hashable, group_id: Hashable):
        return cls(registry, PermissionsChangedEventTarget.GROUP, group_targeted=target_group_id,
                   group_id=group_id)

    @classmethod
    def about_default_permissions(cls, registry: Any, group_id: Hashable):
        return cls(registry, PermissionsChangedEventTarget.DEFAULT_PERMISSIONS, group_id=group_id)


@dataclass(frozen=True)
class PermissionsClearedEventArgs(PermissionsChangedEventArgs):
    """The whole registry was reset."""

    @classmethod
    def about_registry(cls, registry: Any):
        return cls(registry, PermissionsChangedEventTarget.ALL)
