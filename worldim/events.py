"""Publish/subscribe registry owned by each World instance.

Handlers are stored in registration order per event name and invoked
synchronously: ``emit`` returns only after every handler has run. A handler
may call back into the world (for example ``process_message``); that nested
call completes, including its own emission, before the outer emission moves
on to the next handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .schemas import EnterEvent, InhabitantLike, LeaveEvent

EVENT_ENTER = "inhabitant:enter"
EVENT_LEAVE = "inhabitant:leave"
EVENT_MESSAGE = "message"

Handler = Callable[[Any], None]


@dataclass(frozen=True)
class InhabitantEntered:
    """Payload of ``inhabitant:enter``."""

    inhabitant: InhabitantLike
    event: EnterEvent


@dataclass(frozen=True)
class InhabitantLeft:
    """Payload of ``inhabitant:leave``."""

    inhabitant_id: str
    event: LeaveEvent


class EventBus:
    """Ordered, synchronous, in-process fan-out."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = {}

    def on(self, event_name: str, handler: Handler) -> Handler:
        """Register ``handler`` for ``event_name``; returns the handler."""

        self._handlers.setdefault(event_name, []).append(handler)
        return handler

    def off(self, event_name: str, handler: Handler) -> bool:
        """Remove the first registration of ``handler``. False if absent."""

        handlers = self._handlers.get(event_name)
        if not handlers or handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def emit(self, event_name: str, payload: Any) -> int:
        """Invoke handlers in registration order; returns how many ran.

        Handlers registered while an emission is in progress are not called
        for that emission. Exceptions propagate to the emitter.
        """

        handlers = tuple(self._handlers.get(event_name, ()))
        for handler in handlers:
            handler(payload)
        return len(handlers)

    def handler_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, ()))
