"""Registry-specific exceptions for neo-permissions."""

from typing import Any, Optional

from .base import NeoPermissionsError


class ConfigurationError(NeoPermissionsError):
    """Raised when registry settings are invalid."""
    pass


class InvalidPathError(NeoPermissionsError):
    """Raised when a permission string cannot be parsed."""

    def __init__(self, permission: Any, reason: str, position: Optional[int] = None):
        super().__init__(
            f"Invalid permission '{permission}': {reason}",
            details={"permission": permission, "reason": reason, "position": position},
        )
        self.permission = permission
        self.reason = reason
        self.position = position


class InvalidOperationError(NeoPermissionsError):
    """Raised when the registry is used against its contract, e.g. with an unusable id."""
    pass


class MissingPermissionError(NeoPermissionsError):
    """Raised by the assertion helpers when a permission is not held."""

    def __init__(self, permission: str, message: Optional[str] = None, **details: Any):
        super().__init__(
            message or f"Missing the permission {permission}",
            details={"permission": permission, **details},
        )
        self.permission = permission


class UserMissingPermissionError(MissingPermissionError):
    """Raised when a user does not hold a required permission."""

    def __init__(self, user_id: Any, permission: str, message: Optional[str] = None):
        super().__init__(
            permission,
            message or f"The user with the ID {user_id} was missing the permission {permission}",
            user_id=user_id,
        )
        self.user_id = user_id


class GroupMissingPermissionError(MissingPermissionError):
    """Raised when a group does not hold a required permission."""

    def __init__(self, group_id: Any, permission: str, message: Optional[str] = None):
        super().__init__(
            permission,
            message or f"The group {group_id} was missing the permission {permission}",
            group_id=group_id,
        )
        self.group_id = group_id


class PermissionNotDefaultError(MissingPermissionError):
    """Raised when the default permissions do not include a permission."""

    def __init__(self, permission: str, message: Optional[str] = None):
        super().__init__(
            permission,
            message or f"The default permissions were missing the permission {permission}",
        )
