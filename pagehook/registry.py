from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Dict, Tuple

from .types import EventHandler, EventKind


@dataclass(frozen=True)
class HandlerRegistration:
    kind: EventKind
    handler: EventHandler
    sequence: int

    @property
    def name(self) -> str:
        return getattr(self.handler, "__qualname__", repr(self.handler))


class HandlerRegistry:
    """Append-only registry of event handlers, keyed by event kind.

    Handlers for a kind run in the order they were registered; nothing is
    deduplicated and nothing can be removed. Populate it during startup and
    share it with the dispatcher.

    Each append swaps the kind's tuple for a new, longer one under a lock,
    so a concurrent reader always sees a complete snapshot.

    Example:
        >>> registry = HandlerRegistry()
        >>> @registry.handle_message
        ... def echo(message, reply):
        ...     reply.text(message.text)
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter = itertools.count()
        self._handlers: Dict[EventKind, Tuple[HandlerRegistration, ...]] = {}

    def register(self, kind: EventKind, handler: EventHandler) -> HandlerRegistration:
        kind = EventKind(kind)
        if kind is EventKind.UNKNOWN:
            raise ValueError("handlers cannot be registered for unknown events")
        if not callable(handler):
            raise TypeError(f"handler must be callable, got {type(handler).__name__}")

        with self._lock:
            registration = HandlerRegistration(kind=kind, handler=handler, sequence=next(self._counter))
            self._handlers[kind] = self._handlers.get(kind, ()) + (registration,)
        return registration

    def handlers_for(self, kind: EventKind) -> Tuple[HandlerRegistration, ...]:
        return self._handlers.get(kind, ())

    def count(self, kind: EventKind) -> int:
        return len(self.handlers_for(kind))

    def summary(self) -> Dict[str, int]:
        """Number of handlers per kind, for startup logging."""
        return {kind.value: len(regs) for kind, regs in self._handlers.items()}

    # Per-kind shortcuts; each returns the handler so it works as a decorator.

    def handle_message(self, handler: EventHandler) -> EventHandler:
        self.register(EventKind.TEXT, handler)
        return handler

    def handle_delivery(self, handler: EventHandler) -> EventHandler:
        self.register(EventKind.DELIVERY, handler)
        return handler

    def handle_read(self, handler: EventHandler) -> EventHandler:
        self.register(EventKind.READ, handler)
        return handler

    def handle_postback(self, handler: EventHandler) -> EventHandler:
        self.register(EventKind.POSTBACK, handler)
        return handler

    def handle_optin(self, handler: EventHandler) -> EventHandler:
        self.register(EventKind.OPTIN, handler)
        return handler

    def handle_referral(self, handler: EventHandler) -> EventHandler:
        self.register(EventKind.REFERRAL, handler)
        return handler

    def handle_account_linking(self, handler: EventHandler) -> EventHandler:
        self.register(EventKind.ACCOUNT_LINKING, handler)
        return handler
