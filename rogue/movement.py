"""
Move resolution: the collision rules every entity move goes through.
"""

import logging
from typing import Optional

from .entity import Entity
from .event_system import Event, EventBus
from .geometry import Rectangle
from .quadtree import QuadTree
from .world import Map

logger = logging.getLogger(__name__)


class CollisionRules:
    """
    Move handler that keeps entities on walkable floor and off each other.

    A move is refused when the destination is outside the index, outside
    every room, on a room wall, or already taken by another colliding entity.
    Accepted moves are committed through the quadtree so the index never goes
    stale, and the rooms at the new position are marked visited.

    Parameters:
        dungeon: The map whose walls and doors constrain movement
        tree: The index holding every placed entity
        event_bus: Optional bus for ENTITY_* / MOVE_BLOCKED / ROOM_ENTERED events
        explorer: If set, only this entity marks rooms as visited
    """

    def __init__(
        self,
        dungeon: Map,
        tree: QuadTree,
        event_bus: Optional[EventBus] = None,
        explorer: Optional[Entity] = None,
    ) -> None:
        self.dungeon: Map = dungeon
        self.tree: QuadTree = tree
        self.event_bus: Optional[EventBus] = event_bus
        self.explorer: Optional[Entity] = explorer

    def _emit(self, event: Event, **kwargs) -> None:
        if self.event_bus:
            self.event_bus.emit(event, **kwargs)

    def add(self, entity: Entity) -> bool:
        """
        Index entity and hand it this rule set, unless it already has a handler.

        Returns False if the tree refuses it (out of bounds or already present).
        """
        if not self.tree.insert(entity):
            return False
        if entity.move_handler is None:
            entity.move_handler = self
        self._emit(Event.ENTITY_ADDED, entity=entity)
        self._visit_rooms(entity)
        return True

    def remove(self, entity: Entity) -> bool:
        if not self.tree.remove(entity):
            return False
        self._emit(Event.ENTITY_REMOVED, entity=entity)
        return True

    def blocking_reason(self, entity: Entity, x: int, y: int) -> Optional[str]:
        """Why entity may not stand at (x, y), or None if it may."""
        if not self.tree.bounds.contains(x, y):
            return "out of bounds"

        destination = Rectangle(x, y, entity.width, entity.height)
        rooms = [room for room in self.dungeon.rooms_overlapping(destination) if room.contains(x, y)]
        if not rooms:
            return "outside rooms"
        if any(room.is_wall(x, y) for room in rooms):
            return "wall"

        for other in self.tree.query(destination, cull=True):
            if other is entity:
                continue
            if other.is_colliding:
                return "occupied"
        return None

    def validate_and_apply(self, entity: Entity, x: int, y: int) -> bool:
        reason = self.blocking_reason(entity, x, y)
        if reason is not None:
            logger.debug("%r blocked at (%d, %d): %s", entity, x, y, reason)
            self._emit(Event.MOVE_BLOCKED, entity=entity, x=x, y=y, reason=reason)
            return False

        if not self.tree.move(entity, x, y):
            # Moves are only valid for indexed entities.
            logger.warning("%r is not indexed; move to (%d, %d) refused", entity, x, y)
            self._emit(Event.MOVE_BLOCKED, entity=entity, x=x, y=y, reason="not indexed")
            return False

        self._emit(Event.ENTITY_MOVED, entity=entity, x=x, y=y)
        self._visit_rooms(entity)
        return True

    def _visit_rooms(self, entity: Entity) -> None:
        if self.explorer is not None and entity is not self.explorer:
            return
        for room in self.dungeon.rooms_at(entity.x, entity.y):
            if room.visited:
                continue
            room.visit()
            room_index = next(i for i, r in enumerate(self.dungeon.rooms) if r is room)
            self._emit(Event.ROOM_ENTERED, entity=entity, room_index=room_index)
