"""Permissions registry with change events.

Wraps a registry and raises an event after every mutation. Each specific
event is followed by ``contents_changed`` with the same payload, so a
listener that only cares that something changed can register once.
"""

import logging
from typing import Any, Hashable, Iterable, Optional

from ..core.events import (
    Event,
    PermissionAssignedEventArgs,
    PermissionGroupAssignedEventArgs,
    PermissionGroupRevokedEventArgs,
    PermissionRevokedEventArgs,
    PermissionsChangedEventArgs,
    PermissionsClearedEventArgs,
)
from ..core.protocols import PermissionsRegistryProtocol
from ..core.value_objects import Permission, parse_permission
from .base import PermissionsRegistryDecorator

logger = logging.getLogger(__name__)


class PermissionsRegistryWithEvents(PermissionsRegistryDecorator):
    """Registry decorator raising synchronous change events.

    Handlers run on the mutating thread after the change is applied. Bulk
    and revoke-all operations are carried out one item at a time so each
    item raises its own event. Revocations that remove nothing raise none.
    """

    def __init__(self, inner: PermissionsRegistryProtocol):
        super().__init__(inner)

        # Passed to handlers as args.registry; create_permissions_registry points it at the outermost wrapper
        self.event_source: PermissionsRegistryProtocol = self

        self.permission_assigned: Event[PermissionAssignedEventArgs] = Event("permission_assigned")
        self.permission_revoked: Event[PermissionRevokedEventArgs] = Event("permission_revoked")
        self.group_assigned: Event[PermissionGroupAssignedEventArgs] = Event("group_assigned")
        self.group_revoked: Event[PermissionGroupRevokedEventArgs] = Event("group_revoked")
        self.cleared: Event[PermissionsClearedEventArgs] = Event("cleared")
        self.contents_changed: Event[PermissionsChangedEventArgs] = Event("contents_changed")

    def _raise(self, event: Event, args: PermissionsChangedEventArgs) -> None:
        logger.debug(f"Raising '{event.name}' for {args.target.value} change")
        event.invoke(args)
        self.contents_changed.invoke(args)

    # Permission mutations

    def assign_user_permission(self, user_id: Any, permission: str) -> Optional[Permission]:
        old_value = self._inner.assign_user_permission(user_id, permission)
        self._raise(
            self.permission_assigned,
            PermissionAssignedEventArgs.about_user(self.event_source, user_id, permission, old_value),
        )
        return old_value

    def assign_group_permission(self, group_id: Hashable, permission: str) -> Optional[Permission]:
        old_value = self._inner.assign_group_permission(group_id, permission)
        self._raise(
            self.permission_assigned,
            PermissionAssignedEventArgs.about_group(self.event_source, group_id, permission, old_value),
        )
        return old_value

    def assign_default_permission(self, permission: str) -> Optional[Permission]:
        old_value = self._inner.assign_default_permission(permission)
        self._raise(
            self.permission_assigned,
            PermissionAssignedEventArgs.about_default_permissions(self.event_source, permission, old_value),
        )
        return old_value

    def assign_user_permissions(self, user_id: Any, permissions: Iterable[str]) -> None:
        for permission in self._validated(permissions):
            self.assign_user_permission(user_id, permission)

    def assign_group_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> None:
        for permission in self._validated(permissions):
            self.assign_group_permission(group_id, permission)

    def assign_default_permissions(self, permissions: Iterable[str]) -> None:
        for permission in self._validated(permissions):
            self.assign_default_permission(permission)

    def revoke_user_permission(self, user_id: Any, permission: str) -> Optional[Permission]:
        removed = self._inner.revoke_user_permission(user_id, permission)
        if removed is not None:
            self._raise(
                self.permission_revoked,
                PermissionRevokedEventArgs.about_user(self.event_source, user_id, permission, removed),
            )
        return removed

    def revoke_group_permission(self, group_id: Hashable, permission: str) -> Optional[Permission]:
        removed = self._inner.revoke_group_permission(group_id, permission)
        if removed is not None:
            self._raise(
                self.permission_revoked,
                PermissionRevokedEventArgs.about_group(self.event_source, group_id, permission, removed),
            )
        return removed

    def revoke_default_permission(self, permission: str) -> Optional[Permission]:
        removed = self._inner.revoke_default_permission(permission)
        if removed is not None:
            self._raise(
                self.permission_revoked,
                PermissionRevokedEventArgs.about_default_permissions(self.event_source, permission, removed),
            )
        return removed

    def revoke_all_user_permissions(self, user_id: Any) -> None:
        for permission in self._inner.get_user_permissions(user_id):
            self.revoke_user_permission(user_id, permission)

    def revoke_all_group_permissions(self, group_id: Hashable) -> None:
        for permission in self._inner.get_group_permissions(group_id):
            self.revoke_group_permission(group_id, permission)

    def revoke_all_default_permissions(self) -> None:
        for permission in self._inner.get_default_permissions():
            self.revoke_default_permission(permission)

    # Group mutations

    def assign_group_to_user(self, user_id: Any, group_id: Hashable) -> None:
        self._inner.assign_group_to_user(user_id, group_id)
        self._raise(
            self.group_assigned,
            PermissionGroupAssignedEventArgs.about_user(self.event_source, user_id, group_id),
        )

    def assign_group_to_group(self, group_id: Hashable, parent_group_id: Hashable) -> None:
        self._inner.assign_group_to_group(group_id, parent_group_id)
        self._raise(
            self.group_assigned,
            PermissionGroupAssignedEventArgs.about_group(self.event_source, group_id, parent_group_id),
        )

    def assign_default_group(self, group_id: Hashable) -> None:
        self._inner.assign_default_group(group_id)
        self._raise(
            self.group_assigned,
            PermissionGroupAssignedEventArgs.about_default_permissions(self.event_source, group_id),
        )

    def assign_groups_to_user(self, user_id: Any, group_ids: Iterable[Hashable]) -> None:
        for group_id in group_ids:
            self.assign_group_to_user(user_id, group_id)

    def assign_groups_to_group(self, group_id: Hashable, parent_group_ids: Iterable[Hashable]) -> None:
        for parent_group_id in parent_group_ids:
            self.assign_group_to_group(group_id, parent_group_id)

    def assign_default_groups(self, group_ids: Iterable[Hashable]) -> None:
        for group_id in group_ids:
            self.assign_default_group(group_id)

    def revoke_group_from_user(self, user_id: Any, group_id: Hashable) -> bool:
        removed = self._inner.revoke_group_from_user(user_id, group_id)
        if removed:
            self._raise(
                self.group_revoked,
                PermissionGroupRevokedEventArgs.about_user(self.event_source, user_id, group_id),
            )
        return removed

    def revoke_group_from_group(self, group_id: Hashable, parent_group_id: Hashable) -> bool:
        removed = self._inner.revoke_group_from_group(group_id, parent_group_id)
        if removed:
            self._raise(
                self.group_revoked,
                PermissionGroupRevokedEventArgs.about_group(self.event_source, group_id, parent_group_id),
            )
        return removed

    def revoke_default_group(self, group_id: Hashable) -> bool:
        removed = self._inner.revoke_default_group(group_id)
        if removed:
            self._raise(
                self.group_revoked,
                PermissionGroupRevokedEventArgs.about_default_permissions(self.event_source, group_id),
            )
        return removed

    def revoke_all_groups_from_user(self, user_id: Any) -> None:
        for group_id in self._inner.get_groups_of_user(user_id):
            self.revoke_group_from_user(user_id, group_id)

    def revoke_all_groups_from_group(self, group_id: Hashable) -> None:
        for parent_group_id in self._inner.get_groups_of_group(group_id):
            self.revoke_group_from_group(group_id, parent_group_id)

    def revoke_all_default_groups(self) -> None:
        for group_id in self._inner.get_default_groups():
            self.revoke_default_group(group_id)

    def clear(self) -> None:
        self._inner.clear()
        self._raise(self.cleared, PermissionsClearedEventArgs.about_registry(self.event_source))

    @staticmethod
    def _validated(permissions: Iterable[str]) -> list:
        permissions = list(permissions)
        for permission in permissions:
            parse_permission(permission)
        return permissions
