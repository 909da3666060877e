"""Value objects for neo-permissions."""

from .permission_path import (
    PermissionPath,
    ParsedPermission,
    parse_permission,
    parse_query,
)
from .permission import (
    Permission,
    PermissionMatch,
    PERMITTING,
    NEGATING,
)
from .permission_status import PermissionStatus

__all__ = [
    "PermissionPath",
    "ParsedPermission",
    "parse_permission",
    "parse_query",
    "Permission",
    "PermissionMatch",
    "PERMITTING",
    "NEGATING",
    "PermissionStatus",
]
