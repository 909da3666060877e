"""Registry factory.

Composes a core registry with the configured decorators: the cache
innermost, then events, then locking outside, so event handlers run while
the lock is held and observe the state their event describes.
"""

import logging
from typing import Any, Callable, Optional

from .config import RegistrySettings, get_settings, setup_logging
from .core.protocols import PermissionsRegistryProtocol
from .decorators import (
    CachedPermissionsRegistry,
    PermissionsRegistryWithEvents,
    ThreadsafePermissionsRegistry,
)
from .registry import PermissionsRegistry

logger = logging.getLogger(__name__)


def create_permissions_registry(
    settings: Optional[RegistrySettings] = None,
    id_to_string: Callable[[Any], str] = str,
    id_from_string: Callable[[str], Any] = str,
) -> PermissionsRegistryProtocol:
    """Create a permissions registry as configured.

    Also applies the logging settings to the ``neo_permissions`` logger.

    Args:
        settings: Registry settings; the cached environment settings when omitted
        id_to_string: Converts a user id to its canonical string
        id_from_string: Converts a canonical string back to a user id

    Returns:
        The core registry, wrapped in CachedPermissionsRegistry,
        PermissionsRegistryWithEvents and/or ThreadsafePermissionsRegistry
        as the settings ask

    Raises:
        ConfigurationError: If the environment settings are invalid
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)

    registry: PermissionsRegistryProtocol = PermissionsRegistry(
        id_to_string=id_to_string,
        id_from_string=id_from_string,
        validate_ids=settings.validate_ids,
    )

    if settings.enable_cache:
        registry = CachedPermissionsRegistry(registry, max_size=settings.cache_max_size)

    events_registry: Optional[PermissionsRegistryWithEvents] = None
    if settings.enable_events:
        registry = events_registry = PermissionsRegistryWithEvents(registry)

    if settings.thread_safe:
        registry = ThreadsafePermissionsRegistry(registry)

    if events_registry is not None:
        events_registry.event_source = registry

    logger.debug(
        f"Created {type(registry).__name__} "
        f"(cache={settings.enable_cache}, events={settings.enable_events}, "
        f"thread_safe={settings.thread_safe}, validate_ids={settings.validate_ids})"
    )
    return registry
