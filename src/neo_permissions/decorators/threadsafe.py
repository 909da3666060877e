"""Thread-safe permissions registry.

Serialises every registry operation behind a single re-entrant lock. The
lock is re-entrant so event handlers running under a mutation can query
the registry they were raised from.
"""

import functools
import threading
from typing import Callable

from ..core.protocols import REGISTRY_OPERATIONS, PermissionsRegistryProtocol
from .base import PermissionsRegistryDecorator


def _synchronized(method: Callable) -> Callable:
    """Run the forwarded operation while holding the registry lock."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class ThreadsafePermissionsRegistry(PermissionsRegistryDecorator):
    """Registry decorator making every operation mutually exclusive.

    Queries take the same lock as mutations, so a query never observes a
    half-applied bulk operation.
    """

    def __init__(self, inner: PermissionsRegistryProtocol):
        super().__init__(inner)
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """The lock, for callers needing several operations to run atomically."""
        return self._lock


for _name in REGISTRY_OPERATIONS:
    setattr(
        ThreadsafePermissionsRegistry,
        _name,
        _synchronized(getattr(PermissionsRegistryDecorator, _name)),
    )

del _name
