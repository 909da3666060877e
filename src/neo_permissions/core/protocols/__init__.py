"""Protocol contracts for neo-permissions."""

from .registry import (
    PermissionsRegistryProtocol,
    MUTATING_OPERATIONS,
    QUERY_OPERATIONS,
    REGISTRY_OPERATIONS,
)

__all__ = [
    "PermissionsRegistryProtocol",
    "MUTATING_OPERATIONS",
    "QUERY_OPERATIONS",
    "REGISTRY_OPERATIONS",
]
