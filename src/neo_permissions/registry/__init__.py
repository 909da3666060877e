"""Permissions registry core: permission sets, membership graph and resolution."""

from .permission_set import PermissionSet
from .membership_graph import MembershipGraph
from .permissions_registry import PermissionsRegistry

__all__ = [
    "PermissionSet",
    "MembershipGraph",
    "PermissionsRegistry",
]
