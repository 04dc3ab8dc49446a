"""
Line-of-sight raycasting on the cell grid.

The walker is Bresenham's line algorithm with one twist: the y delta is
multiplied by ``y_scale`` before the error term is computed. Terminal cells
are taller than they are wide, so a scale above 1 makes a vertical step count
for more distance than a horizontal one.
"""

from typing import Callable, List, Tuple

# Visit callback: return True to stop the walk at this cell.
CellVisitor = Callable[[int, int], bool]

# Rough height/width ratio of a terminal cell.
DEFAULT_Y_SCALE: float = 2.0


def trace(
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    y_scale: float,
    visit: CellVisitor,
) -> bool:
    """
    Walk the cells from (x0, y0) to (x1, y1) inclusive, calling visit on each.

    With a y_scale other than 1 the error term can ask for a step on an axis
    that already reached its target. That step is dropped, and if nothing is
    left to move the other axis steps instead, so the walk always ends at
    (x1, y1) after at most |dx| + |dy| + 1 cells.

    Returns:
        True if visit stopped the walk, False if the walk reached (x1, y1).
    """
    dx = abs(x1 - x0)
    dy = int(abs(y1 - y0) * y_scale)
    sx = -1 if x0 > x1 else 1
    sy = -1 if y0 > y1 else 1

    err = dx - dy
    x, y = x0, y0

    while True:
        if visit(x, y):
            return True
        if x == x1 and y == y1:
            return False

        e2 = 2 * err
        step_x = e2 > -dy and x != x1
        step_y = e2 < dx and y != y1
        if not step_x and not step_y:
            step_x = x != x1
            step_y = not step_x

        if step_x:
            err -= dy
            x += sx
        if step_y:
            err += dx
            y += sy


def line_cells(
    x0: int, y0: int, x1: int, y1: int, y_scale: float = 1.0
) -> List[Tuple[int, int]]:
    """All cells on the traced line, in walk order."""
    cells: List[Tuple[int, int]] = []

    def collect(x: int, y: int) -> bool:
        cells.append((x, y))
        return False

    trace(x0, y0, x1, y1, y_scale, collect)
    return cells


def has_line_of_sight(
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    is_opaque: Callable[[int, int], bool],
    y_scale: float = 1.0,
) -> bool:
    """True if no cell on the line from (x0, y0) to (x1, y1) is opaque."""
    return not trace(x0, y0, x1, y1, y_scale, is_opaque)
