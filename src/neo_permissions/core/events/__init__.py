"""Registry change events.

Synchronous events and their payloads, raised by
PermissionsRegistryWithEvents after each mutation.
"""

from .target import PermissionsChangedEventTarget
from .event import Event
from .event_args import (
    PermissionsChangedEventArgs,
    PermissionAssignedEventArgs,
    PermissionRevokedEventArgs,
    PermissionGroupAssignedEventArgs,
    PermissionGroupRevokedEventArgs,
    PermissionsClearedEventArgs,
)

__all__ = [
    "PermissionsChangedEventTarget",
    "Event",
    "PermissionsChangedEventArgs",
    "PermissionAssignedEventArgs",
    "PermissionRevokedEventArgs",
    "PermissionGroupAssignedEventArgs",
    "PermissionGroupRevokedEventArgs",
    "PermissionsClearedEventArgs",
]
