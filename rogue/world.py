import logging
from enum import IntEnum
from typing import List, Optional, Sequence

from .geometry import Circle, Point, Rectangle
from .raycast import DEFAULT_Y_SCALE, has_line_of_sight
from .room import Room

logger = logging.getLogger(__name__)


class CellKind(IntEnum):
    """How a single map cell should be drawn."""

    OUT_OF_BOUNDS = 0
    WALL = 1
    FLOOR = 2
    NOT_VISIBLE = 3


def bounding_rectangle(rooms: Sequence[Rectangle]) -> Rectangle:
    """Smallest rectangle containing every room."""
    left = min(room.left for room in rooms)
    top = min(room.top for room in rooms)
    right = max(room.right for room in rooms)
    bottom = max(room.bottom for room in rooms)
    return Rectangle(left, top, right - left, bottom - top)


class Map:
    """
    A generated dungeon: its rooms in generation order plus derived anchors.

    The first room is the start room and the last room is the end room. The
    layout never changes after construction. The only mutable state is the
    active region cache, which narrows room lookups to the rooms visible in
    the current render pass.
    """

    def __init__(self, rooms: Sequence[Room]) -> None:
        if not rooms:
            raise ValueError("a map needs at least one room")
        self.rooms: List[Room] = list(rooms)
        self._bounds: Rectangle = bounding_rectangle(self.rooms)
        self._start: Point = Point(*self.rooms[0].center())
        self._end: Point = Point(*self.rooms[-1].center())
        self._active_rooms: Optional[List[Room]] = None

    def __repr__(self) -> str:
        return f"Map(rooms={len(self.rooms)}, bounds={self._bounds!r})"

    @property
    def bounding_box(self) -> Rectangle:
        return self._bounds.copy()

    @property
    def start(self) -> Point:
        return self._start.copy()

    @property
    def end(self) -> Point:
        return self._end.copy()

    @property
    def start_room(self) -> Room:
        return self.rooms[0]

    @property
    def end_room(self) -> Room:
        return self.rooms[-1]

    def rooms_overlapping(self, region: Rectangle) -> List[Room]:
        """Rooms sharing at least one cell with region."""
        return [room for room in self._candidate_rooms() if room.overlaps(region)]

    def rooms_at(self, x: int, y: int) -> List[Room]:
        """Rooms containing the cell (x, y)."""
        return [room for room in self._candidate_rooms() if room.contains(x, y)]

    def set_active_region(self, region: Rectangle) -> None:
        """Restrict room lookups to the rooms overlapping region."""
        self._active_rooms = None
        self._active_rooms = self.rooms_overlapping(region)
        logger.debug(
            "Active region %r covers %d of %d rooms",
            region,
            len(self._active_rooms),
            len(self.rooms),
        )

    def clear_active_region(self) -> None:
        self._active_rooms = None

    def is_wall(self, x: int, y: int) -> bool:
        return any(room.is_wall(x, y) for room in self.rooms_at(x, y))

    def is_floor(self, x: int, y: int) -> bool:
        """True if (x, y) is inside some room and is not a wall."""
        rooms = self.rooms_at(x, y)
        return bool(rooms) and not any(room.is_wall(x, y) for room in rooms)

    def classify(
        self,
        x: int,
        y: int,
        viewer_x: int,
        viewer_y: int,
        line_of_sight: bool = True,
        y_scale: float = DEFAULT_Y_SCALE,
        sight_radius: Optional[int] = None,
    ) -> CellKind:
        """
        Classify (x, y) as seen from (viewer_x, viewer_y).

        Walls are opaque whether or not they are visible. Floor cells are
        NOT_VISIBLE when line_of_sight is on and a wall blocks the ray from
        the viewer, or when sight_radius is set and the cell lies outside
        that radius (y distances stretched by y_scale).
        """
        rooms = self.rooms_at(x, y)
        if not rooms:
            return CellKind.OUT_OF_BOUNDS
        if any(room.is_wall(x, y) for room in rooms):
            return CellKind.WALL
        if not line_of_sight:
            return CellKind.FLOOR
        if sight_radius is not None and not Circle(
            viewer_x, viewer_y, sight_radius, y_scale
        ).contains(x, y):
            return CellKind.NOT_VISIBLE
        if not has_line_of_sight(
            viewer_x, viewer_y, x, y, self.is_wall, y_scale
        ):
            return CellKind.NOT_VISIBLE
        return CellKind.FLOOR

    def _candidate_rooms(self) -> List[Room]:
        if self._active_rooms is not None:
            return self._active_rooms
        return self.rooms
