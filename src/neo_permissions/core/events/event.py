"""Synchronous event with registered handlers.

ONLY handler registration and dispatch - handlers run in registration order
on the caller's thread, immediately when the event is invoked.
"""

import logging
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

TArgs = TypeVar("TArgs")


class Event(Generic[TArgs]):
    """A named event that handlers can register with.

    Registering the same handler twice has no effect. A handler that raises
    stops dispatch and the exception reaches whoever invoked the event.
    """

    def __init__(self, name: str):
        self.name = name
        self._handlers: List[Callable[[TArgs], None]] = []

    def register(self, handler: Callable[[TArgs], None]) -> Callable[[TArgs], None]:
        """Register a handler; returns it so this can be used as a decorator."""
        if handler not in self._handlers:
            self._handlers.append(handler)
        return handler

    def deregister(self, handler: Callable[[TArgs], None]) -> bool:
        """Remove a handler; returns whether it was registered."""
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def invoke(self, args: TArgs) -> None:
        # Snapshot so handlers may (de)register during dispatch
        for handler in tuple(self._handlers):
            try:
                handler(args)
            except Exception:
                logger.exception(f"Handler {handler!r} for event '{self.name}' failed")
                raise

    def clear(self) -> None:
        self._handlers.clear()

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"Event({self.name!r}, handlers={len(self._handlers)})"
