"""Registry decorator base.

ONLY forwarding - wraps another permissions registry and passes every
operation through unchanged. Subclasses override what they add behaviour to.
"""

from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional

from ..core.protocols import PermissionsRegistryProtocol
from ..core.value_objects import Permission, PermissionStatus


class PermissionsRegistryDecorator:
    """Forwards every registry operation to the wrapped registry."""

    def __init__(self, inner: PermissionsRegistryProtocol):
        self._inner = inner

    @property
    def inner(self) -> PermissionsRegistryProtocol:
        """The wrapped registry."""
        return self._inner

    @property
    def id_to_string(self) -> Callable[[Any], str]:
        return self._inner.id_to_string

    @property
    def id_from_string(self) -> Callable[[str], Any]:
        return self._inner.id_from_string

    def __getattr__(self, name: str) -> Any:
        # Lets attributes added by inner decorators (e.g. events) show through
        if name == "_inner":
            raise AttributeError(name)
        return getattr(self._inner, name)

    # Permission mutations

    def assign_user_permission(self, user_id: Any, permission: str) -> Optional[Permission]:
        return self._inner.assign_user_permission(user_id, permission)

    def assign_group_permission(self, group_id: Hashable, permission: str) -> Optional[Permission]:
        return self._inner.assign_group_permission(group_id, permission)

    def assign_default_permission(self, permission: str) -> Optional[Permission]:
        return self._inner.assign_default_permission(permission)

    def assign_user_permissions(self, user_id: Any, permissions: Iterable[str]) -> None:
        self._inner.assign_user_permissions(user_id, permissions)

    def assign_group_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> None:
        self._inner.assign_group_permissions(group_id, permissions)

    def assign_default_permissions(self, permissions: Iterable[str]) -> None:
        self._inner.assign_default_permissions(permissions)

    def revoke_user_permission(self, user_id: Any, permission: str) -> Optional[Permission]:
        return self._inner.revoke_user_permission(user_id, permission)

    def revoke_group_permission(self, group_id: Hashable, permission: str) -> Optional[Permission]:
        return self._inner.revoke_group_permission(group_id, permission)

    def revoke_default_permission(self, permission: str) -> Optional[Permission]:
        return self._inner.revoke_default_permission(permission)

    def revoke_all_user_permissions(self, user_id: Any) -> None:
        self._inner.revoke_all_user_permissions(user_id)

    def revoke_all_group_permissions(self, group_id: Hashable) -> None:
        self._inner.revoke_all_group_permissions(group_id)

    def revoke_all_default_permissions(self) -> None:
        self._inner.revoke_all_default_permissions()

    # Group mutations

    def assign_group_to_user(self, user_id: Any, group_id: Hashable) -> None:
        self._inner.assign_group_to_user(user_id, group_id)

    def assign_group_to_group(self, group_id: Hashable, parent_group_id: Hashable) -> None:
        self._inner.assign_group_to_group(group_id, parent_group_id)

    def assign_default_group(self, group_id: Hashable) -> None:
        self._inner.assign_default_group(group_id)

    def assign_groups_to_user(self, user_id: Any, group_ids: Iterable[Hashable]) -> None:
        self._inner.assign_groups_to_user(user_id, group_ids)

    def assign_groups_to_group(self, group_id: Hashable, parent_group_ids: Iterable[Hashable]) -> None:
        self._inner.assign_groups_to_group(group_id, parent_group_ids)

    def assign_default_groups(self, group_ids: Iterable[Hashable]) -> None:
        self._inner.assign_default_groups(group_ids)

    def revoke_group_from_user(self, user_id: Any, group_id: Hashable) -> bool:
        return self._inner.revoke_group_from_user(user_id, group_id)

    def revoke_group_from_group(self, group_id: Hashable, parent_group_id: Hashable) -> bool:
        return self._inner.revoke_group_from_group(group_id, parent_group_id)

    def revoke_default_group(self, group_id: Hashable) -> bool:
        return self._inner.revoke_default_group(group_id)

    def revoke_all_groups_from_user(self, user_id: Any) -> None:
        self._inner.revoke_all_groups_from_user(user_id)

    def revoke_all_groups_from_group(self, group_id: Hashable) -> None:
        self._inner.revoke_all_groups_from_group(group_id)

    def revoke_all_default_groups(self) -> None:
        self._inner.revoke_all_default_groups()

    def clear(self) -> None:
        self._inner.clear()

    # Permission queries

    def user_has_permission(self, user_id: Any, permission: str) -> bool:
        return self._inner.user_has_permission(user_id, permission)

    def group_has_permission(self, group_id: Hashable, permission: str) -> bool:
        return self._inner.group_has_permission(group_id, permission)

    def is_default_permission(self, permission: str) -> bool:
        return self._inner.is_default_permission(permission)

    def get_user_permission_arg(self, user_id: Any, permission: str) -> Optional[str]:
        return self._inner.get_user_permission_arg(user_id, permission)

    def get_group_permission_arg(self, group_id: Hashable, permission: str) -> Optional[str]:
        return self._inner.get_group_permission_arg(group_id, permission)

    def get_default_permission_arg(self, permission: str) -> Optional[str]:
        return self._inner.get_default_permission_arg(permission)

    def get_user_permission_status(self, user_id: Any, permission: str) -> PermissionStatus:
        return self._inner.get_user_permission_status(user_id, permission)

    def get_group_permission_status(self, group_id: Hashable, permission: str) -> PermissionStatus:
        return self._inner.get_group_permission_status(group_id, permission)

    def get_default_permission_status(self, permission: str) -> PermissionStatus:
        return self._inner.get_default_permission_status(permission)

    def get_user_permission_statuses(
        self, user_id: Any, permissions: Iterable[str]
    ) -> Dict[str, PermissionStatus]:
        return self._inner.get_user_permission_statuses(user_id, permissions)

    def get_group_permission_statuses(
        self, group_id: Hashable, permissions: Iterable[str]
    ) -> Dict[str, PermissionStatus]:
        return self._inner.get_group_permission_statuses(group_id, permissions)

    def get_default_permission_statuses(self, permissions: Iterable[str]) -> Dict[str, PermissionStatus]:
        return self._inner.get_default_permission_statuses(permissions)

    def user_has_all_permissions(self, user_id: Any, permissions: Iterable[str]) -> bool:
        return self._inner.user_has_all_permissions(user_id, permissions)

    def user_has_any_permissions(self, user_id: Any, permissions: Iterable[str]) -> bool:
        return self._inner.user_has_any_permissions(user_id, permissions)

    def group_has_all_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> bool:
        return self._inner.group_has_all_permissions(group_id, permissions)

    def group_has_any_permissions(self, group_id: Hashable, permissions: Iterable[str]) -> bool:
        return self._inner.group_has_any_permissions(group_id, permissions)

    def are_all_default_permissions(self, permissions: Iterable[str]) -> bool:
        return self._inner.are_all_default_permissions(permissions)

    def any_are_default_permissions(self, permissions: Iterable[str]) -> bool:
        return self._inner.any_are_default_permissions(permissions)

    def user_has_any_sub_permission_of(self, user_id: Any, permission: str) -> bool:
        return self._inner.user_has_any_sub_permission_of(user_id, permission)

    def group_has_any_sub_permission_of(self, group_id: Hashable, permission: str) -> bool:
        return self._inner.group_has_any_sub_permission_of(group_id, permission)

    def is_or_any_sub_permission_of_is_default(self, permission: str) -> bool:
        return self._inner.is_or_any_sub_permission_of_is_default(permission)

    def assert_user_has_permission(self, user_id: Any, permission: str) -> None:
        self._inner.assert_user_has_permission(user_id, permission)

    def assert_group_has_permission(self, group_id: Hashable, permission: str) -> None:
        self._inner.assert_group_has_permission(group_id, permission)

    def assert_is_default_permission(self, permission: str) -> None:
        self._inner.assert_is_default_permission(permission)

    # Group queries

    def user_has_group(self, user_id: Any, group_id: Hashable) -> bool:
        return self._inner.user_has_group(user_id, group_id)

    def group_extends_from_group(self, group_id: Hashable, parent_group_id: Hashable) -> bool:
        return self._inner.group_extends_from_group(group_id, parent_group_id)

    def is_default_group(self, group_id: Hashable) -> bool:
        return self._inner.is_default_group(group_id)

    def get_groups_of_user(self, user_id: Any) -> List[Hashable]:
        return self._inner.get_groups_of_user(user_id)

    def get_groups_of_group(self, group_id: Hashable) -> List[Hashable]:
        return self._inner.get_groups_of_group(group_id)

    def get_default_groups(self) -> List[Hashable]:
        return self._inner.get_default_groups()

    def get_all_groups_of_user(self, user_id: Any) -> List[Hashable]:
        return self._inner.get_all_groups_of_user(user_id)

    def get_all_groups_of_group(self, group_id: Hashable) -> List[Hashable]:
        return self._inner.get_all_groups_of_group(group_id)

    # Listing

    def get_user_permissions(self, user_id: Any) -> List[str]:
        return self._inner.get_user_permissions(user_id)

    def get_user_permissions_with_args(self, user_id: Any) -> List[str]:
        return self._inner.get_user_permissions_with_args(user_id)

    def get_group_permissions(self, group_id: Hashable) -> List[str]:
        return self._inner.get_group_permissions(group_id)

    def get_group_permissions_with_args(self, group_id: Hashable) -> List[str]:
        return self._inner.get_group_permissions_with_args(group_id)

    def get_default_permissions(self) -> List[str]:
        return self._inner.get_default_permissions()

    def get_default_permissions_with_args(self) -> List[str]:
        return self._inner.get_default_permissions_with_args()

    def get_users(self) -> List[Any]:
        return self._inner.get_users()

    def get_group_names(self) -> List[Hashable]:
        return self._inner.get_group_names()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._inner!r})"
