"""Permissions registry protocol contract."""

from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Protocol, runtime_checkable

from ..value_objects import Permission, PermissionStatus


MUTATING_OPERATIONS = (
    "assign_user_permission",
    "assign_group_permission",
    "assign_default_permission",
    "assign_user_permissions",
    "assign_group_permissions",
    "assign_default_permissions",
    "revoke_user_permission",
    "revoke_group_permission",
    "revoke_default_permission",
    "revoke_all_user_permissions",
    "revoke_all_group_permissions",
    "revoke_all_default_permissions",
    "assign_group_to_user",
    "assign_group_to_group",
    "assign_default_group",
    "assign_groups_to_user",
    "assign_groups_to_group",
    "assign_default_groups",
    "revoke_group_from_user",
    "revoke_group_from_group",
    "revoke_default_group",
    "revoke_all_groups_from_user",
    "revoke_all_groups_from_group",
    "revoke_all_default_groups",
    "clear",
)

QUERY_OPERATIONS = (
    "user_has_permission",
    "group_has_permission",
    "is_default_permission",
    "get_user_permission_arg",
    "get_group_permission_arg",
    "get_default_permission_arg",
    "get_user_permission_status",
    "get_group_permission_status",
    "get_default_permission_status",
    "get_user_permission_statuses",
    "get_group_permission_statuses",
    "get_default_permission_statuses",
    "user_has_all_permissions",
    "user_has_any_permissions",
    "group_has_all_permissions",
    "group_has_any_permissions",
    "are_all_default_permissions",
    "any_are_default_permissions",
    "user_has_any_sub_permission_of",
    "group_has_any_sub_permission_of",
    "is_or_any_sub_permission_of_is_default",
    "assert_user_has_permission",
    "assert_group_has_permission",
    "assert_is_default_permission",
    "user_has_group",
    "group_extends_from_group",
    "is_default_group",
    "get_groups_of_user",
    "get_groups_of_group",
    "get_default_groups",
    "get_all_groups_of_user",
    "get_all_groups_of_group",
    "get_user_permissions",
    "get_user_permissions_with_args",
    "get_group_permissions",
    "get_group_permissions_with_args",
    "get_default_permissions",
    "get_default_permissions_with_args",
    "get_users",
    "get_group_names",
)

REGISTRY_OPERATIONS = MUTATING_OPERATIONS + QUERY_OPERATIONS


@runtime_checkable
class PermissionsRegistryProtocol(Protocol):
    """Protocol for permissions registries and their decorators.

    Defines the operation set shared by the core registry, the events
    facade and the thread-safe wrapper, so the three compose freely.
    """

    id_to_string: Callable[[Any], str]
    id_from_string: Callable[[str], Any]

    def assign_user_permission(self, user_id: Any, permission: str) -> Optional[Permission]:
        """Grant a permission directly to a user.

        Args:
            user_id: User identifier
            permission: Permission string, optionally negated or with an argument

        Returns:
            The permission previously stored at that exact path, or None
        """
        ...

    def assign_group_permission(self, group_id: Hashable, permission: str) -> Optional[Permission]:
        ...

    def assign_default_permission(self, permission: str) -> Optional[Permission]:
        ...

    def assign_user_permissions(self, user_id: Any, permissions: Iterable[str]) -> None:
        ...

    def assign_group_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> None:
        ...

    def assign_default_permissions(self, permissions: Iterable[str]) -> None:
        ...

    def revoke_user_permission(self, user_id: Any, permission: str) -> Optional[Permission]:
        """Remove the exact-path entry from a user.

        Returns:
            The removed permission, or None when there was nothing to remove
        """
        ...

    def revoke_group_permission(self, group_id: Hashable, permission: str) -> Optional[Permission]:
        ...

    def revoke_default_permission(self, permission: str) -> Optional[Permission]:
        ...

    def revoke_all_user_permissions(self, user_id: Any) -> None:
        ...

    def revoke_all_group_permissions(self, group_id: Hashable) -> None:
        ...

    def revoke_all_default_permissions(self) -> None:
        ...

    def assign_group_to_user(self, user_id: Any, group_id: Hashable) -> None:
        ...

    def assign_group_to_group(self, group_id: Hashable, parent_group_id: Hashable) -> None:
        ...

    def assign_default_group(self, group_id: Hashable) -> None:
        ...

    def assign_groups_to_user(self, user_id: Any, group_ids: Iterable[Hashable]) -> None:
        ...

    def assign_groups_to_group(self, group_id: Hashable, parent_group_ids: Iterable[Hashable]) -> None:
        ...

    def assign_default_groups(self, group_ids: Iterable[Hashable]) -> None:
        ...

    def revoke_group_from_user(self, user_id: Any, group_id: Hashable) -> bool:
        """Remove a direct membership.

        Returns:
            True if a membership was removed
        """
        ...

    def revoke_group_from_group(self, group_id: Hashable, parent_group_id: Hashable) -> bool:
        ...

    def revoke_default_group(self, group_id: Hashable) -> bool:
        ...

    def revoke_all_groups_from_user(self, user_id: Any) -> None:
        ...

    def revoke_all_groups_from_group(self, group_id: Hashable) -> None:
        ...

    def revoke_all_default_groups(self) -> None:
        ...

    def clear(self) -> None:
        ...

    def user_has_permission(self, user_id: Any, permission: str) -> bool:
        """Check whether a user holds a permission.

        Returns:
            True if the most relevant entry across the user's own permissions,
            groups and the defaults grants the permission
        """
        ...

    def group_has_permission(self, group_id: Hashable, permission: str) -> bool:
        ...

    def is_default_permission(self, permission: str) -> bool:
        ...

    def get_user_permission_arg(self, user_id: Any, permission: str) -> Optional[str]:
        ...

    def get_group_permission_arg(self, group_id: Hashable, permission: str) -> Optional[str]:
        ...

    def get_default_permission_arg(self, permission: str) -> Optional[str]:
        ...

    def get_user_permission_status(self, user_id: Any, permission: str) -> PermissionStatus:
        ...

    def get_group_permission_status(self, group_id: Hashable, permission: str) -> PermissionStatus:
        ...

    def get_default_permission_status(self, permission: str) -> PermissionStatus:
        ...

    def get_user_permission_statuses(
        self, user_id: Any, permissions: Iterable[str]
    ) -> Dict[str, PermissionStatus]:
        ...

    def get_group_permission_statuses(
        self, group_id: Hashable, permissions: Iterable[str]
    ) -> Dict[str, PermissionStatus]:
        ...

    def get_default_permission_statuses(self, permissions: Iterable[str]) -> Dict[str, PermissionStatus]:
        ...

    def user_has_all_permissions(self, user_id: Any, permissions: Iterable[str]) -> bool:
        ...

    def user_has_any_permissions(self, user_id: Any, permissions: Iterable[str]) -> bool:
        ...

    def group_has_all_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> bool:
        ...

    def group_has_any_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> bool:
        ...

    def are_all_default_permissions(self, permissions: Iterable[str]) -> bool:
        ...

    def any_are_default_permissions(self, permissions: Iterable[str]) -> bool:
        ...

    def user_has_any_sub_permission_of(self, user_id: Any, permission: str) -> bool:
        ...

    def group_has_any_sub_permission_of(self, group_id: Hashable, permission: str) -> bool:
        ...

    def is_or_any_sub_permission_of_is_default(self, permission: str) -> bool:
        ...

    def assert_user_has_permission(self, user_id: Any, permission: str) -> None:
        ...

    def assert_group_has_permission(self, group_id: Hashable, permission: str) -> None:
        ...

    def assert_is_default_permission(self, permission: str) -> None:
        ...

    def user_has_group(self, user_id: Any, group_id: Hashable) -> bool:
        ...

    def group_extends_from_group(self, group_id: Hashable, parent_group_id: Hashable) -> bool:
        ...

    def is_default_group(self, group_id: Hashable) -> bool:
        ...

    def get_groups_of_user(self, user_id: Any) -> List[Hashable]:
        ...

    def get_groups_of_group(self, group_id: Hashable) -> List[Hashable]:
        ...

    def get_default_groups(self) -> List[Hashable]:
        ...

    def get_all_groups_of_user(self, user_id: Any) -> List[Hashable]:
        ...

    def get_all_groups_of_group(self, group_id: Hashable) -> List[Hashable]:
        ...

    def get_user_permissions(self, user_id: Any) -> List[str]:
        ...

    def get_user_permissions_with_args(self, user_id: Any) -> List[str]:
        ...

    def get_group_permissions(self, group_id: Hashable) -> List[str]:
        ...

    def get_group_permissions_with_args(self, group_id: Hashable) -> List[str]:
        ...

    def get_default_permissions(self) -> List[str]:
        ...

    def get_default_permissions_with_args(self) -> List[str]:
        ...

    def get_users(self) -> List[Any]:
        ...

    def get_group_names(self) -> List[Hashable]:
        ...
