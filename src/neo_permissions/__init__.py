"""Neo-Permissions - hierarchical permissions registry for the NeoMultiTenant platform.

Users and groups hold dot-separated permission paths with wildcards,
negations and arguments; groups inherit from other groups and a default
set applies to everyone. Queries resolve to the most specific matching
entry.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    LogFormat,
    LogLevel,
    LogVerbosity,
    RegistrySettings,
    get_settings,
)

from .core.exceptions import (
    # Base Exception
    NeoPermissionsError,

    # Registry Exceptions
    ConfigurationError,
    InvalidPathError,
    InvalidOperationError,
    MissingPermissionError,
    UserMissingPermissionError,
    GroupMissingPermissionError,
    PermissionNotDefaultError,

    # Utility Functions
    create_error_response,
)

from .core.value_objects import (
    PermissionPath,
    ParsedPermission,
    Permission,
    PermissionMatch,
    PermissionStatus,
    parse_permission,
)

from .core.events import (
    Event,
    PermissionsChangedEventTarget,
    PermissionsChangedEventArgs,
    PermissionAssignedEventArgs,
    PermissionRevokedEventArgs,
    PermissionGroupAssignedEventArgs,
    PermissionGroupRevokedEventArgs,
    PermissionsClearedEventArgs,
)

from .core.protocols import PermissionsRegistryProtocol

from .registry import (
    PermissionSet,
    MembershipGraph,
    PermissionsRegistry,
)

from .decorators import (
    PermissionsRegistryDecorator,
    CachedPermissionsRegistry,
    PermissionsRegistryWithEvents,
    ThreadsafePermissionsRegistry,
)

from .factory import create_permissions_registry

__all__ = [
    "__version__",

    # Configuration
    "LogFormat",
    "LogLevel",
    "LogVerbosity",
    "RegistrySettings",
    "get_settings",
    "setup_logging",

    # Exceptions
    "NeoPermissionsError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidOperationError",
    "MissingPermissionError",
    "UserMissingPermissionError",
    "GroupMissingPermissionError",
    "PermissionNotDefaultError",
    "create_error_response",

    # Value objects
    "PermissionPath",
    "ParsedPermission",
    "Permission",
    "PermissionMatch",
    "PermissionStatus",
    "parse_permission",

    # Events
    "Event",
    "PermissionsChangedEventTarget",
    "PermissionsChangedEventArgs",
    "PermissionAssignedEventArgs",
    "PermissionRevokedEventArgs",
    "PermissionGroupAssignedEventArgs",
    "PermissionGroupRevokedEventArgs",
    "PermissionsClearedEventArgs",

    # Registry
    "PermissionsRegistryProtocol",
    "PermissionSet",
    "MembershipGraph",
    "PermissionsRegistry",
    "PermissionsRegistryDecorator",
    "CachedPermissionsRegistry",
    "PermissionsRegistryWithEvents",
    "ThreadsafePermissionsRegistry",
    "create_permissions_registry",
]
