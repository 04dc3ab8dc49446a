"""
Geometry primitives shared by the dungeon, the spatial index and entities.

All coordinates are integer grid cells. Rectangles are half-open: the cell at
``right`` (or ``bottom``) lies outside the rectangle.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Point:
    """A mutable integer grid position."""

    x: int = 0
    y: int = 0

    @property
    def xy(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def set_xy(self, x: int, y: int) -> None:
        self.x, self.y = x, y

    def copy(self) -> "Point":
        return Point(self.x, self.y)


class Rectangle:
    """
    An axis-aligned rectangle anchored at its top-left cell.

    Rectangles compare by identity. Rooms and entities are rectangles too,
    and the spatial index relies on telling two objects apart even when they
    share a position.
    """

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x: int = x
        self.y: int = y
        self._width: int = 0
        self._height: int = 0
        self.set_size(width, height)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(x={self.x}, y={self.y}, "
            f"width={self._width}, height={self._height})"
        )

    @property
    def width(self) -> int:
        return self._width

    @width.setter
    def width(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"width must be >= 0, got {value}")
        self._width = value

    @property
    def height(self) -> int:
        return self._height

    @height.setter
    def height(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"height must be >= 0, got {value}")
        self._height = value

    def set_size(self, width: int, height: int) -> None:
        """Set both dimensions; neither may be negative."""
        if width < 0 or height < 0:
            raise ValueError(f"size must be >= 0, got {width}x{height}")
        self._width, self._height = width, height

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def xy(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def set_xy(self, x: int, y: int) -> None:
        self.x, self.y = x, y

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self._width

    @property
    def bottom(self) -> int:
        return self.y + self._height

    def center(self) -> Tuple[int, int]:
        """Center cell, rounding toward the top-left for even sizes."""
        return (self.x + self._width // 2, self.y + self._height // 2)

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom

    def collides_with(self, other: "Rectangle") -> bool:
        """Inclusive test: rectangles that only touch still collide."""
        return (
            self.left <= other.right
            and other.left <= self.right
            and self.top <= other.bottom
            and other.top <= self.bottom
        )

    # Same test under the name the rendering code uses.
    intersects = collides_with

    def overlaps(self, other: "Rectangle") -> bool:
        """Strict test: rectangles must share at least one cell."""
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )

    def copy(self) -> "Rectangle":
        return Rectangle(self.x, self.y, self._width, self._height)


class Circle:
    """
    A disc of cells around a center, with y distances stretched by y_scale.

    Terminal cells are taller than wide, so a y_scale above 1 makes the disc
    look round on screen rather than in cell units.
    """

    def __init__(self, x: int, y: int, radius: int, y_scale: float = 1.0) -> None:
        if radius < 0:
            raise ValueError(f"radius must be >= 0, got {radius}")
        self.center: Point = Point(x, y)
        self.radius: int = radius
        self.y_scale: float = y_scale

    def __repr__(self) -> str:
        return (
            f"Circle(x={self.center.x}, y={self.center.y}, "
            f"radius={self.radius}, y_scale={self.y_scale})"
        )

    def _distance_sq(self, x: float, y: float) -> float:
        dx = x - self.center.x
        dy = (y - self.center.y) * self.y_scale
        return dx * dx + dy * dy

    def contains(self, x: int, y: int) -> bool:
        return self._distance_sq(x, y) <= self.radius * self.radius

    def overlaps_circle(self, other: "Circle") -> bool:
        """Centers closer than the sum of the radii, measured with this circle's y_scale."""
        reach = self.radius + other.radius
        return self._distance_sq(other.center.x, other.center.y) <= reach * reach

    def overlaps_rectangle(self, rect: Rectangle) -> bool:
        """True if any cell of rect lies inside the circle."""
        if rect.width == 0 or rect.height == 0:
            return False
        closest_x = min(max(self.center.x, rect.left), rect.right - 1)
        closest_y = min(max(self.center.y, rect.top), rect.bottom - 1)
        return self.contains(closest_x, closest_y)
