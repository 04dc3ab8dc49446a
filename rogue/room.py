"""
Rooms and the wall/door geometry derived from their neighbor links.
"""

from enum import Enum
from typing import List, Optional

from .geometry import Point, Rectangle


class Direction(Enum):
    """Cardinal directions, valued by neighbor slot index."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def opposite(self) -> "Direction":
        """Returns the opposite direction."""
        return Direction((self.value + 2) % 4)

    def step(self) -> Point:
        """Returns the offset for moving one cell in this direction."""
        steps = {
            Direction.NORTH: Point(0, -1),
            Direction.EAST: Point(1, 0),
            Direction.SOUTH: Point(0, 1),
            Direction.WEST: Point(-1, 0),
        }
        return steps[self].copy()

    @property
    def is_vertical(self) -> bool:
        """True for NORTH and SOUTH, whose doors run along the x axis."""
        return self in (Direction.NORTH, Direction.SOUTH)


# Cells kept solid at each end of a door span, so doors never touch a corner.
DOOR_INSET = 2


class Room(Rectangle):
    """
    A rectangular room with up to one linked neighbor per direction.

    The outer ring of cells is wall, except where a linked neighbor opens a
    door. A linked neighbor always sits flush against the matching side.
    """

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(x, y, width, height)
        self._neighbors: List[Optional["Room"]] = [None, None, None, None]
        self.visited: bool = False

    def get_neighbor(self, direction: Direction) -> Optional["Room"]:
        return self._neighbors[direction.value]

    def set_neighbor(self, direction: Direction, neighbor: Optional["Room"]) -> None:
        self._neighbors[direction.value] = neighbor

    @property
    def neighbors(self) -> List["Room"]:
        """Linked rooms, in direction order."""
        return [n for n in self._neighbors if n is not None]

    def neighbor_count(self) -> int:
        return len(self.neighbors)

    def visit(self) -> None:
        self.visited = True

    def is_wall(self, x: int, y: int) -> bool:
        """True if (x, y) is a boundary cell of this room and not a door."""
        if not self.contains(x, y):
            return False
        on_edge = (
            x == self.left
            or x == self.right - 1
            or y == self.top
            or y == self.bottom - 1
        )
        return on_edge and not self.is_door(x, y)

    def is_door(self, x: int, y: int) -> bool:
        if not self.contains(x, y):
            return False
        return (
            (y == self.top and self._in_door_span(Direction.NORTH, x, y))
            or (x == self.right - 1 and self._in_door_span(Direction.EAST, x, y))
            or (y == self.bottom - 1 and self._in_door_span(Direction.SOUTH, x, y))
            or (x == self.left and self._in_door_span(Direction.WEST, x, y))
        )

    def door_span(self, direction: Direction) -> Optional[range]:
        """
        Coordinates along the edge that are open toward the neighbor.

        The span is centered on this room's own center and is as wide as the
        narrower of the two rooms, shrunk by DOOR_INSET on each end. Returns
        None when there is no neighbor on that side; the range may be empty
        for very small rooms.
        """
        neighbor = self.get_neighbor(direction)
        if neighbor is None:
            return None
        cx, cy = self.center()
        if direction.is_vertical:
            half = min(self.width, neighbor.width) // 2
            center = cx
        else:
            half = min(self.height, neighbor.height) // 2
            center = cy
        return range(center - half + DOOR_INSET, center + half - DOOR_INSET + 1)

    def _in_door_span(self, direction: Direction, x: int, y: int) -> bool:
        span = self.door_span(direction)
        if span is None:
            return False
        return (x if direction.is_vertical else y) in span

    def floor_cells(self) -> List[Point]:
        """Interior cells, which are never wall."""
        return [
            Point(x, y)
            for y in range(self.top + 1, self.bottom - 1)
            for x in range(self.left + 1, self.right - 1)
        ]


def link_rooms(room: Room, direction: Direction, other: Room) -> None:
    """Link two rooms in opposite directions."""
    room.set_neighbor(direction, other)
    other.set_neighbor(direction.opposite(), room)


def flush_direction(room: Room, other: Room) -> Optional[Direction]:
    """
    Side of ``room`` that ``other`` sits flush against, if any.

    Flush means the two rooms share an edge line and their extents along that
    edge overlap by at least one cell; corner contact does not count.
    """
    shares_columns = room.left < other.right and other.left < room.right
    shares_rows = room.top < other.bottom and other.top < room.bottom
    if shares_columns and other.bottom == room.top:
        return Direction.NORTH
    if shares_columns and other.top == room.bottom:
        return Direction.SOUTH
    if shares_rows and other.left == room.right:
        return Direction.EAST
    if shares_rows and other.right == room.left:
        return Direction.WEST
    return None
