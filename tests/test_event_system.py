"""Tests for the event system."""

import pytest
from rogue.event_system import EventBus, Event, EventData


class TestEventBus:
    """Test EventBus functionality."""

    def test_create_empty_bus(self):
        """Should create an empty event bus."""
        bus = EventBus()
        assert bus.handler_count() == 0

    def test_subscribe_handler(self):
        """Should allow subscribing handlers to events."""
        bus = EventBus()

        def handler(event_data: EventData) -> None:
            pass

        bus.subscribe(Event.LEVEL_START, handler)
        assert bus.handler_count(Event.LEVEL_START) == 1
        assert bus.handler_count() == 1

    def test_emit_calls_handler(self):
        """Emitting an event should pass its kwargs to subscribed handlers."""
        bus = EventBus()
        called = []

        def handler(event_data: EventData) -> None:
            called.append(event_data)

        bus.subscribe(Event.ROOM_ENTERED, handler)
        bus.emit(Event.ROOM_ENTERED, room_index=5)

        assert len(called) == 1
        assert called[0].event == Event.ROOM_ENTERED
        assert called[0].kwargs["room_index"] == 5

    def test_emit_only_calls_matching_event_handlers(self):
        """Should only call handlers subscribed to the emitted event."""
        bus = EventBus()
        called_moved = []
        called_blocked = []

        bus.subscribe(Event.ENTITY_MOVED, lambda data: called_moved.append(data))
        bus.subscribe(Event.MOVE_BLOCKED, lambda data: called_blocked.append(data))
        bus.emit(Event.ENTITY_MOVED, x=1, y=2)

        assert len(called_moved) == 1
        assert len(called_blocked) == 0

    def test_unsubscribe_handler(self):
        """Should allow unsubscribing handlers."""
        bus = EventBus()
        called = []

        def handler(event_data: EventData) -> None:
            called.append(event_data.event)

        bus.subscribe(Event.ENTITY_ADDED, handler)
        bus.emit(Event.ENTITY_ADDED)
        bus.unsubscribe(Event.ENTITY_ADDED, handler)
        bus.emit(Event.ENTITY_ADDED)
        assert len(called) == 1

    def test_unsubscribe_nonexistent_handler_raises(self):
        """Unsubscribing a handler that wasn't subscribed should raise ValueError."""
        bus = EventBus()

        def handler(event_data: EventData) -> None:
            pass

        with pytest.raises(ValueError):
            bus.unsubscribe(Event.LEVEL_START, handler)

        bus.subscribe(Event.LEVEL_START, lambda data: None)
        with pytest.raises(ValueError):
            bus.unsubscribe(Event.LEVEL_START, handler)

    def test_clear_removes_all_handlers(self):
        """Clear should remove all event handlers."""
        bus = EventBus()
        bus.subscribe(Event.LEVEL_START, lambda data: None)
        bus.subscribe(Event.ENTITY_REMOVED, lambda data: None)
        assert bus.handler_count() == 2

        bus.clear()
        assert bus.handler_count() == 0

    def test_handler_error_does_not_crash_bus(self):
        """If a handler raises an error, other handlers should still be called."""
        bus = EventBus()
        called = []

        def bad_handler(event_data: EventData) -> None:
            raise RuntimeError("Handler failed")

        bus.subscribe(Event.MOVE_BLOCKED, bad_handler)
        bus.subscribe(Event.MOVE_BLOCKED, lambda data: called.append(True))

        bus.emit(Event.MOVE_BLOCKED, reason="wall")
        assert len(called) == 1

    def test_handler_error_reraised_in_debug(self):
        """Debug mode surfaces handler errors."""
        bus = EventBus()
        bus.set_debug(True)

        def bad_handler(event_data: EventData) -> None:
            raise RuntimeError("Handler failed")

        bus.subscribe(Event.MOVE_BLOCKED, bad_handler)
        with pytest.raises(RuntimeError):
            bus.emit(Event.MOVE_BLOCKED)

    def test_handler_may_unsubscribe_itself(self):
        """Handlers can unsubscribe during emit without skipping others."""
        bus = EventBus()
        called = []

        def once(event_data: EventData) -> None:
            called.append("once")
            bus.unsubscribe(Event.ENTITY_MOVED, once)

        bus.subscribe(Event.ENTITY_MOVED, once)
        bus.subscribe(Event.ENTITY_MOVED, lambda data: called.append("always"))
        bus.emit(Event.ENTITY_MOVED)
        bus.emit(Event.ENTITY_MOVED)
        assert called == ["once", "always", "always"]


class TestEventData:
    """Test EventData."""

    def test_repr(self):
        assert repr(EventData(Event.LEVEL_START)) == "EventData(LEVEL_START)"
        assert repr(EventData(Event.ROOM_ENTERED, {"room_index": 2})) == (
            "EventData(ROOM_ENTERED, room_index=2)"
        )
