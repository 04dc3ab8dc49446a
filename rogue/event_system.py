"""
Event bus for gameplay notifications.

The move handler and the game-state bootstrap emit events as entities are
placed and moved; renderers, message logs and tests subscribe to whichever
ones they care about.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class Event(Enum):
    """Event types that can occur during play."""

    # Level lifecycle
    LEVEL_START = auto()  # kwargs: rooms, start, end

    # Index membership
    ENTITY_ADDED = auto()  # kwargs: entity
    ENTITY_REMOVED = auto()  # kwargs: entity

    # Movement
    ENTITY_MOVED = auto()  # kwargs: entity, x, y
    MOVE_BLOCKED = auto()  # kwargs: entity, x, y, reason
    ROOM_ENTERED = auto()  # kwargs: entity, room_index (first visit only)


@dataclass
class EventData:
    """Container for event data passed to handlers."""

    event: Event
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        if self.kwargs:
            kwargs_str = ", ".join(f"{k}={v}" for k, v in self.kwargs.items())
            return f"EventData({self.event.name}, {kwargs_str})"
        return f"EventData({self.event.name})"


# Event handler signature: takes event data, returns nothing
EventHandler = Callable[[EventData], None]


class EventBus:
    """
    Publish/subscribe hub for gameplay events.

    A failing handler is logged and skipped so the remaining handlers still
    run. In debug mode the failure is re-raised instead.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Event, List[EventHandler]] = {}
        self._debug: bool = False

    def set_debug(self, debug: bool) -> None:
        """Enable or disable debug logging and re-raising of handler errors."""
        self._debug = debug

    def subscribe(self, event: Event, handler: EventHandler) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def unsubscribe(self, event: Event, handler: EventHandler) -> None:
        """
        Raises:
            ValueError: If handler was not subscribed to this event
        """
        if event not in self._handlers:
            raise ValueError(f"No handlers registered for event {event}")
        if handler not in self._handlers[event]:
            raise ValueError(f"Handler not subscribed to event {event}")
        self._handlers[event].remove(handler)

    def emit(self, event: Event, **kwargs: Any) -> None:
        """
        Emit an event, triggering all subscribed handlers.

        Args:
            event: The event type to emit
            **kwargs: Event-specific data passed to handlers
        """
        event_data = EventData(event=event, kwargs=kwargs)

        if self._debug:
            logger.debug("Emitting %r", event_data)

        for handler in list(self._handlers.get(event, [])):
            try:
                handler(event_data)
            except Exception:
                logger.exception("Handler error for %s", event.name)
                if self._debug:
                    raise

    def clear(self) -> None:
        """Remove all event handlers."""
        self._handlers.clear()

    def handler_count(self, event: Optional[Event] = None) -> int:
        """Handlers for event, or across all events when event is None."""
        if event is not None:
            return len(self._handlers.get(event, []))
        return sum(len(handlers) for handlers in self._handlers.values())
