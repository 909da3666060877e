"""Registry decorators: query caching, change events and thread safety by composition."""

from .base import PermissionsRegistryDecorator
from .cached import CachedPermissionsRegistry
from .with_events import PermissionsRegistryWithEvents
from .threadsafe import ThreadsafePermissionsRegistry

__all__ = [
    "PermissionsRegistryDecorator",
    "CachedPermissionsRegistry",
    "PermissionsRegistryWithEvents",
    "ThreadsafePermissionsRegistry",
]
