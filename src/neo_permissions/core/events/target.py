"""Permissions changed event target."""

from enum import Enum


class PermissionsChangedEventTarget(str, Enum):
    """What part of the registry a change applied to."""
    USER = "user"
    GROUP = "group"
    DEFAULT_PERMISSIONS = "default_permissions"
    ALL = "all"
